"""
Seating Visualization

Draws the classroom as a grid of two-seat desks: seats are colored by
the occupant's gender, disabled seats are hatched and locked seats carry
a marker.
"""

from typing import Optional, Sequence, Tuple

import matplotlib.patches as patches
import matplotlib.pyplot as plt

from .models import DeskView, Gender, SeatingConfig, SeatView


class SeatingVisualizer:
    """Matplotlib rendering of desk views"""

    SEAT_WIDTH = 1.0
    SEAT_HEIGHT = 0.8
    DESK_GAP = 0.5
    ROW_GAP = 0.6

    def __init__(self, config: SeatingConfig):
        self.config = config
        self.gender_colors = {
            Gender.MALE: "lightskyblue",
            Gender.FEMALE: "lightpink",
            Gender.UNKNOWN: "lightgray",
        }

    def seat_origin(self, desk: DeskView, side_index: int) -> Tuple[float, float]:
        """Lower-left corner of a seat in plot coordinates"""
        desk_width = 2 * self.SEAT_WIDTH + self.DESK_GAP
        x = (desk.col - 1) * desk_width + side_index * self.SEAT_WIDTH
        y = (desk.row - 1) * (self.SEAT_HEIGHT + self.ROW_GAP)
        return x, y

    def _draw_seat(self, ax: plt.Axes, seat: SeatView, x: float, y: float):
        if seat.disabled:
            face, hatch = "white", "xx"
        elif seat.occupant is not None:
            face, hatch = self.gender_colors[seat.occupant.gender], None
        else:
            face, hatch = "white", None

        ax.add_patch(patches.Rectangle(
            (x, y), self.SEAT_WIDTH, self.SEAT_HEIGHT,
            facecolor=face, edgecolor="black", hatch=hatch, linewidth=1,
        ))

        if seat.occupant is not None:
            ax.text(x + self.SEAT_WIDTH / 2, y + self.SEAT_HEIGHT / 2, seat.occupant.name,
                    ha='center', va='center', fontsize=8)
        if seat.locked:
            ax.plot(x + self.SEAT_WIDTH - 0.12, y + 0.12, marker="s", color="goldenrod", markersize=5)

    def plot_layout(self,
                    desks: Sequence[DeskView],
                    ax: Optional[plt.Axes] = None,
                    title: str = "Seating Layout"):
        """Draw all desks onto ax (a new figure if omitted)"""
        if ax is None:
            fig, ax = plt.subplots(figsize=(12, 8))

        for desk in desks:
            for side_index, seat in enumerate(desk.seats):
                x, y = self.seat_origin(desk, side_index)
                self._draw_seat(ax, seat, x, y)

        desk_width = 2 * self.SEAT_WIDTH + self.DESK_GAP
        ax.set_xlim(-0.25, self.config.cols * desk_width)
        ax.set_ylim(-0.25, self.config.rows * (self.SEAT_HEIGHT + self.ROW_GAP))
        ax.set_aspect("equal")
        ax.invert_yaxis()
        ax.axis("off")
        ax.set_title(title)

        handles = [patches.Patch(facecolor=color, edgecolor="black", label=gender.value)
                   for gender, color in self.gender_colors.items()]
        handles.append(patches.Patch(facecolor="white", edgecolor="black", hatch="xx", label="Disabled"))
        ax.legend(handles=handles, bbox_to_anchor=(1.02, 1), loc='upper left')
        return ax

    def save_layout(self,
                    desks: Sequence[DeskView],
                    save_path: Optional[str] = None,
                    figsize: Tuple[int, int] = (12, 8)):
        """Render to a file, or show interactively when no path is given"""
        fig, ax = plt.subplots(figsize=figsize)
        self.plot_layout(desks, ax)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            plt.close(fig)
        else:
            plt.show()
