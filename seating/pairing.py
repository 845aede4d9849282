"""
Pairing Queue Builder

Partitions the people still to be seated into a queue of desk-mate pairs
and a queue of singles, according to the configured gender policy.
Both queues are consumed from the end (stack discipline) by the desk
allocator.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, TypeVar

import numpy as np

from .models import Gender, Person, SeatingConfig

T = TypeVar("T")

Pair = Tuple[Person, Person]


@dataclass
class PairingQueues:
    """Pairs and singles awaiting desks"""
    pairs: List[Pair] = field(default_factory=list)
    singles: List[Person] = field(default_factory=list)

    def total_people(self) -> int:
        return 2 * len(self.pairs) + len(self.singles)


def shuffled(items: Sequence[T], rng: np.random.Generator) -> List[T]:
    """Uniform random permutation of items drawn from rng"""
    order = rng.permutation(len(items))
    return [items[int(i)] for i in order]


def oriented(first: Person, second: Person, rng: np.random.Generator) -> Pair:
    """Randomize which member of a pair sits on the left"""
    if rng.random() > 0.5:
        return first, second
    return second, first


def _buckets(people: Sequence[Person], rng: np.random.Generator) -> Tuple[List[Person], List[Person], List[Person]]:
    males = shuffled([p for p in people if p.gender == Gender.MALE], rng)
    females = shuffled([p for p in people if p.gender == Gender.FEMALE], rng)
    others = shuffled([p for p in people if p.gender == Gender.UNKNOWN], rng)
    return males, females, others


def build_same_gender_queues(people: Sequence[Person],
                             allow_mixed_gender: bool,
                             rng: np.random.Generator) -> PairingQueues:
    """
    Same-gender priority: pair within each gender bucket first.

    Leftovers (at most one per bucket) are paired across genders only
    when allow_mixed_gender is set; otherwise they stay singles.
    """
    males, females, others = _buckets(people, rng)

    pairs = []
    for bucket in (males, females, others):
        while len(bucket) >= 2:
            pairs.append((bucket.pop(), bucket.pop()))

    # Intermix M-M, F-F and U-U pairs on the board
    pairs = shuffled(pairs, rng)

    leftovers = males + females + others
    if allow_mixed_gender:
        leftovers = shuffled(leftovers, rng)
        while len(leftovers) >= 2:
            first = leftovers.pop()
            second = leftovers.pop()
            pairs.append(oriented(first, second, rng))

    return PairingQueues(pairs=pairs, singles=leftovers)


def build_mixed_gender_queues(people: Sequence[Person],
                              rng: np.random.Generator) -> PairingQueues:
    """
    Mixed-gender priority: build male/female pairs until one side runs out,
    then pair whoever remains regardless of gender.
    """
    males, females, others = _buckets(people, rng)

    pairs = []
    while males and females:
        pairs.append(oriented(males.pop(), females.pop(), rng))

    leftovers = shuffled(males + females + others, rng)
    while len(leftovers) >= 2:
        first = leftovers.pop()
        second = leftovers.pop()
        pairs.append((first, second))

    # Leftover pairs should not cluster behind the mixed pairs
    pairs = shuffled(pairs, rng)

    return PairingQueues(pairs=pairs, singles=leftovers)


def build_pairing_queues(people: Sequence[Person],
                         config: SeatingConfig,
                         rng: np.random.Generator) -> PairingQueues:
    """
    Build pair and single queues for the people still to be seated.

    Args:
        people: Roster minus anyone already pinned to a locked seat
        config: Grid configuration carrying the pairing policy flags
        rng: Random number generator

    Returns:
        PairingQueues with both queues in randomized order
    """
    if config.ignore_gender:
        return build_mixed_gender_queues(people, rng)
    return build_same_gender_queues(people, config.allow_mixed_gender, rng)
