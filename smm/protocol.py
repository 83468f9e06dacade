"""
Monitor Data Types

Value types shared by the grid, the sway IPC client and the edit session.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple

# (row, col) position of a cell in a ScreenGrid
CellIndex = Tuple[int, int]


class InvalidInput(ValueError):
    """Raised when a grid cannot be built from the given monitors."""


@dataclass(frozen=True)
class Monitor:
    """A physical output: absolute position, size and its unique name."""

    name: str
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_output(cls, output: Dict[str, Any]) -> "Monitor":
        """Create a monitor from a sway GET_OUTPUTS entry.

        Args:
            output: Output dictionary with "name" and a "rect" of x/y/width/height

        Returns:
            Monitor at the output's current position
        """
        rect = output["rect"]
        return cls(
            name=output["name"],
            x=int(rect["x"]),
            y=int(rect["y"]),
            width=int(rect["width"]),
            height=int(rect["height"]),
        )

    def moved_to(self, x: int, y: int) -> "Monitor":
        """Return a copy of this monitor at a new position."""
        return replace(self, x=x, y=y)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def overlaps(self, other: "Monitor") -> bool:
        """Check if two monitor rectangles share any area."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def __str__(self) -> str:
        return f"{self.name}: {self.x},{self.y} : {self.width}x{self.height}"
