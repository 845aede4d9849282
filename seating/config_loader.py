"""
Configuration Loading System

Loads YAML configuration files and converts them to the data structures
used by the seating engine.
"""

import time
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import yaml

from .exporter import SeatingExporter
from .geometry import parse_seat_id
from .models import NoVacancyPolicy, Person, SeatingConfig, SeatState
from .roster import DEFAULT_DISABLE_TOKEN, DEFAULT_EMPTY_TOKEN
from .session import SeatingSession


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration root must be a mapping")
    return config


def create_seating_config(config: Dict[str, Any]) -> SeatingConfig:
    """Grid dimensions and pairing policy from a loaded configuration"""
    grid_config = config.get("grid") or {}
    pairing_config = config.get("pairing") or {}

    try:
        return SeatingConfig(
            rows=int(grid_config.get("rows", 6)),
            cols=int(grid_config.get("cols", 5)),
            allow_mixed_gender=bool(pairing_config.get("allow_mixed_gender", False)),
            ignore_gender=bool(pairing_config.get("ignore_gender", False)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid grid configuration: {e}")


def parse_no_vacancy_policy(constraints_config: Dict[str, Any]) -> NoVacancyPolicy:
    value = constraints_config.get("on_no_vacancy", NoVacancyPolicy.DROP.value)
    try:
        return NoVacancyPolicy(value)
    except ValueError:
        raise ConfigurationError(f"Unknown on_no_vacancy policy: {value}")


def parse_disabled_seats(constraints_config: Dict[str, Any]) -> SeatState:
    """Initial seat state with the configured disabled seats"""
    disabled = set()
    for seat in constraints_config.get("disabled_seats", []) or []:
        try:
            parse_seat_id(str(seat))
        except ValueError as e:
            raise ConfigurationError(str(e))
        disabled.add(str(seat))
    return SeatState(disabled=disabled)


def resolve_random_seed(optimization_config: Dict[str, Any]) -> int:
    """Configured seed, or a freshly generated one for "random" / null"""
    random_seed = optimization_config.get("random_seed", "random")

    if random_seed is None or random_seed == "random":
        random_seed = int(time.time() * 1000000) % 2147483647
        print(f"Using random seed: {random_seed}")
    elif isinstance(random_seed, str) and random_seed.isdigit():
        random_seed = int(random_seed)
    elif not isinstance(random_seed, int):
        raise ConfigurationError(f"Invalid random_seed: {random_seed}")

    return random_seed


def create_exporter(config: Dict[str, Any]) -> SeatingExporter:
    export_config = config.get("export") or {}
    roster_config = config.get("roster") or {}
    return SeatingExporter(
        male_label=str(export_config.get("male_label", "男")),
        female_label=str(export_config.get("female_label", "女")),
        disable_token=str(roster_config.get("disable_token", DEFAULT_DISABLE_TOKEN)),
        empty_token=str(roster_config.get("empty_token", DEFAULT_EMPTY_TOKEN)),
    )


def create_session(config: Dict[str, Any], roster: Optional[Sequence[Person]] = None) -> SeatingSession:
    """
    Create a configured SeatingSession from a loaded configuration

    Args:
        config: Configuration dictionary
        roster: Optional people to seat

    Returns:
        SeatingSession with config, constraints and generator applied
    """
    issues = validate_config(config)
    if issues:
        raise ConfigurationError("; ".join(issues))

    constraints_config = config.get("constraints") or {}
    roster_config = config.get("roster") or {}
    seed = resolve_random_seed(config.get("optimization") or {})

    return SeatingSession(
        config=create_seating_config(config),
        roster=roster,
        state=parse_disabled_seats(constraints_config),
        rng=np.random.default_rng(seed),
        no_vacancy_policy=parse_no_vacancy_policy(constraints_config),
        disable_token=str(roster_config.get("disable_token", DEFAULT_DISABLE_TOKEN)),
        empty_token=str(roster_config.get("empty_token", DEFAULT_EMPTY_TOKEN)),
        exporter=create_exporter(config),
    )


def create_session_from_config(config_path: str = "config.yaml",
                               roster: Optional[Sequence[Person]] = None) -> SeatingSession:
    """Load a YAML file and build a session from it"""
    return create_session(load_config(config_path), roster)


def get_visualization_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Get visualization configuration"""
    config = load_config(config_path)
    return config.get("visualization") or {}


def get_export_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Get export configuration"""
    config = load_config(config_path)
    return config.get("export") or {}


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    grid_config = config.get("grid") or {}
    if not isinstance(grid_config, dict):
        issues.append("Section grid must be a mapping")
        grid_config = {}

    for key in ("rows", "cols"):
        value = grid_config.get(key, 1)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            issues.append(f"Grid {key} must be a positive integer")

    pairing_config = config.get("pairing") or {}
    for key in ("allow_mixed_gender", "ignore_gender"):
        if key in pairing_config and not isinstance(pairing_config[key], bool):
            issues.append(f"Pairing {key} must be true or false")

    constraints_config = config.get("constraints") or {}
    policy = constraints_config.get("on_no_vacancy", NoVacancyPolicy.DROP.value)
    if policy not in {p.value for p in NoVacancyPolicy}:
        issues.append(f"Unknown on_no_vacancy policy: {policy}")

    for seat in constraints_config.get("disabled_seats", []) or []:
        try:
            parse_seat_id(str(seat))
        except ValueError:
            issues.append(f"Invalid disabled seat id: {seat}")

    roster_config = config.get("roster") or {}
    disable_token = roster_config.get("disable_token", DEFAULT_DISABLE_TOKEN)
    empty_token = roster_config.get("empty_token", DEFAULT_EMPTY_TOKEN)
    if disable_token == empty_token:
        issues.append("Roster disable_token and empty_token must differ")

    return issues


def print_config_summary(config_path: str = "config.yaml"):
    """Print a summary of the configuration"""
    try:
        config = load_config(config_path)

        print("=" * 50)
        print("CONFIGURATION SUMMARY")
        print("=" * 50)

        grid_config = config.get("grid") or {}
        print(f"Grid Size: {grid_config.get('rows', 6)} rows x {grid_config.get('cols', 5)} desks")

        pairing_config = config.get("pairing") or {}
        mode = "mixed-gender priority" if pairing_config.get("ignore_gender") else "same-gender priority"
        print(f"Pairing: {mode}")
        print(f"Mixed leftovers allowed: {bool(pairing_config.get('allow_mixed_gender', False))}")

        constraints_config = config.get("constraints") or {}
        disabled = constraints_config.get("disabled_seats", []) or []
        print(f"Disabled seats: {len(disabled)}")
        print(f"On no vacancy: {constraints_config.get('on_no_vacancy', 'drop')}")

        issues = validate_config(config)
        if issues:
            print(f"\nValidation Issues ({len(issues)}):")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print("\nConfiguration is valid ✓")

        print("=" * 50)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}")
