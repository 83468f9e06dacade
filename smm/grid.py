"""
Screen Grid

Monitors arranged in a grid of rows and columns that can be padded,
rearranged and turned back into absolute output positions.
"""

from __future__ import annotations
import sys
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .protocol import CellIndex, InvalidInput, Monitor

Cell = Optional[Monitor]

RULE = "============================"


def split_by(
    monitors: Iterable[Monitor],
    outer: Callable[[Monitor], int],
    inner: Callable[[Monitor], int],
    tolerance: int = 0,
) -> List[List[Monitor]]:
    """
    Group monitors by one coordinate and sort each group by the other.

    Args:
        monitors: Monitors to group
        outer: Key that decides group membership (e.g. x for columns)
        inner: Key used to order monitors inside a group
        tolerance: Maximum distance in pixels from the key of the group's
            first monitor. 0 groups by exact key.

    Returns:
        Groups ordered by increasing outer key
    """
    groups: List[List[Monitor]] = []
    group_key = 0
    for monitor in sorted(monitors, key=outer):
        key = outer(monitor)
        if groups and abs(key - group_key) <= tolerance:
            groups[-1].append(monitor)
        else:
            groups.append([monitor])
            group_key = key

    for group in groups:
        group.sort(key=inner)
    return groups


def _min_size(cells: Iterable[Cell], size: Callable[[Monitor], int]) -> int:
    """Smallest size among the occupied cells, 0 if all are empty."""
    return min((size(cell) for cell in cells if cell is not None), default=0)


class ScreenGrid:
    """
    Rectangular grid of optional monitors.

    Row index grows with y, column index grows with x.
    """

    def __init__(self, cells: List[List[Cell]]):
        if not cells or not cells[0]:
            raise InvalidInput("A screen grid needs at least one cell")
        width = len(cells[0])
        if any(len(row) != width for row in cells):
            raise InvalidInput("All grid rows must have the same length")
        self.cells = cells

    @classmethod
    def empty(cls, rows: int, cols: int) -> "ScreenGrid":
        return cls([[None] * cols for _ in range(rows)])

    @classmethod
    def from_monitors(
        cls, monitors: Iterable[Monitor], tolerance: int = 0
    ) -> "ScreenGrid":
        """
        Build a grid from monitors at absolute positions.

        Args:
            monitors: Monitors with unique names
            tolerance: Grouping tolerance in pixels (0 = exact x/y match)

        Returns:
            Grid with every monitor placed in exactly one cell

        Raises:
            InvalidInput: No monitors, two monitors share a name, or two
                monitors fall into the same cell
        """
        monitors = list(monitors)
        if not monitors:
            raise InvalidInput("Cannot build a screen grid without monitors")

        names = [m.name for m in monitors]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise InvalidInput(f"Duplicate monitor names: {', '.join(duplicates)}")

        by_col = split_by(monitors, lambda m: m.x, lambda m: m.y, tolerance)
        by_row = split_by(monitors, lambda m: m.y, lambda m: m.x, tolerance)

        col_of: Dict[str, int] = {}
        for col_idx, column in enumerate(by_col):
            for monitor in column:
                col_of[monitor.name] = col_idx

        grid = cls.empty(len(by_row), len(by_col))
        for row_idx, row in enumerate(by_row):
            for monitor in row:
                col_idx = col_of[monitor.name]
                taken = grid.cells[row_idx][col_idx]
                if taken is not None:
                    raise InvalidInput(
                        f"{monitor.name} and {taken.name} both fall into "
                        f"cell ({row_idx}, {col_idx})"
                    )
                grid.cells[row_idx][col_idx] = monitor
        return grid

    @classmethod
    def from_outputs(
        cls,
        outputs: Iterable[Dict[str, Any]],
        tolerance: int = 0,
        include_inactive: bool = False,
    ) -> "ScreenGrid":
        """Build a grid from sway GET_OUTPUTS entries."""
        monitors = [
            Monitor.from_output(output)
            for output in outputs
            if include_inactive or output.get("active", True)
        ]
        return cls.from_monitors(monitors, tolerance)

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def __getitem__(self, index: CellIndex) -> Cell:
        row, col = self._check_index(index)
        return self.cells[row][col]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScreenGrid):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        return f"ScreenGrid({self.rows}x{self.cols}, {len(self.monitors())} monitors)"

    def __str__(self) -> str:
        return self.format()

    def copy(self) -> "ScreenGrid":
        return ScreenGrid([list(row) for row in self.cells])

    def in_bounds(self, index: CellIndex) -> bool:
        row, col = index
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_empty(self, index: CellIndex) -> bool:
        return self[index] is None

    def monitors(self) -> List[Tuple[CellIndex, Monitor]]:
        """Occupied cells in row-major order."""
        return [
            ((row_idx, col_idx), cell)
            for row_idx, row in enumerate(self.cells)
            for col_idx, cell in enumerate(row)
            if cell is not None
        ]

    def find(self, name: str) -> Optional[CellIndex]:
        """Find the cell holding the monitor with the given name."""
        for index, monitor in self.monitors():
            if monitor.name == name:
                return index
        return None

    def _check_index(self, index: CellIndex) -> CellIndex:
        if not self.in_bounds(index):
            raise IndexError(f"Cell {index} outside of {self.rows}x{self.cols} grid")
        return index

    def _row_occupied(self, row_idx: int) -> bool:
        return any(cell is not None for cell in self.cells[row_idx])

    def _col_occupied(self, col_idx: int) -> bool:
        return any(row[col_idx] is not None for row in self.cells)

    # Padding

    def grow(self):
        """
        Add an empty row/column on every edge that has an occupied cell.

        All four edges are checked before anything is inserted, so each call
        adds at most one line per edge.
        """
        pad_top = self._row_occupied(0)
        pad_bottom = self._row_occupied(self.rows - 1)
        pad_left = self._col_occupied(0)
        pad_right = self._col_occupied(self.cols - 1)

        if pad_left:
            for row in self.cells:
                row.insert(0, None)
        if pad_right:
            for row in self.cells:
                row.append(None)
        if pad_top:
            self.cells.insert(0, [None] * self.cols)
        if pad_bottom:
            self.cells.append([None] * self.cols)

    def shrink(self):
        """
        Remove fully empty border rows/columns.

        Edges are checked before anything is removed. The last remaining
        row or column is never removed.
        """
        drop_top = not self._row_occupied(0)
        drop_bottom = self.rows > 1 and not self._row_occupied(self.rows - 1)
        drop_left = not self._col_occupied(0)
        drop_right = self.cols > 1 and not self._col_occupied(self.cols - 1)

        if drop_bottom:
            self.cells.pop()
        if drop_top and self.rows > 1:
            self.cells.pop(0)
        if drop_right:
            for row in self.cells:
                row.pop()
        if drop_left and self.cols > 1:
            for row in self.cells:
                row.pop(0)

    # Editing

    def move(self, src: CellIndex, dst: CellIndex):
        """
        Move the content of src into dst and clear src.

        Whatever dst held before is overwritten.

        Raises:
            IndexError: src or dst is outside the grid
        """
        src_row, src_col = self._check_index(src)
        dst_row, dst_col = self._check_index(dst)
        value = self.cells[src_row][src_col]
        self.cells[src_row][src_col] = None
        self.cells[dst_row][dst_col] = value

    # Coordinates

    def calculate_coordinates(self, row_idx: int, col_idx: int) -> Tuple[int, int]:
        """
        Absolute (x, y) of the cell at (row_idx, col_idx).

        Each preceding column contributes the smallest width found in it,
        each preceding row the smallest height.
        """
        x = sum(
            _min_size((row[c] for row in self.cells), lambda m: m.width)
            for c in range(col_idx)
        )
        y = sum(
            _min_size(self.cells[r], lambda m: m.height) for r in range(row_idx)
        )
        return (x, y)

    def placements(self) -> List[Monitor]:
        """Monitors at their new absolute positions, in row-major order."""
        return [
            monitor.moved_to(*self.calculate_coordinates(row_idx, col_idx))
            for (row_idx, col_idx), monitor in self.monitors()
        ]

    def placement_commands(self) -> List[str]:
        """sway commands that move every output to its new position."""
        return [placement_command(monitor) for monitor in self.placements()]

    # Diagnostics

    def format(self) -> str:
        lines = [RULE]
        for row in self.cells:
            lines.append(
                "".join(
                    f"== {cell.name if cell is not None else 'None':>8} =="
                    for cell in row
                )
            )
            lines.append(RULE)
        return "\n".join(lines)

    def print(self, file=None):
        print(self.format(), file=file or sys.stdout)


def placement_command(monitor: Monitor) -> str:
    """Render a placement as a sway output command."""
    return f"output {monitor.name} pos {monitor.x} {monitor.y}"
