"""
Edit Session

Owns the screen grid for one editing session and drives it through
refresh, moves and apply.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Tuple

from pubsub import pub

from . import topics
from .grid import ScreenGrid
from .protocol import CellIndex, Monitor

MonitorSource = Callable[[], List[Monitor]]
PlacementSink = Callable[[List[Monitor]], List[Tuple[str, str]]]


class EditSession:
    """Edits a screen grid between a monitor source and a placement sink.

    Publishes grid and layout events on the bus so that a UI or debug
    logger can follow along.

    Flow:
    - refresh(): read monitors, build the grid, grow drop targets
    - move_monitor(): zero or more moves into empty cells
    - apply(): send new positions to the sink, then refresh
    """

    def __init__(
        self,
        source: MonitorSource,
        sink: PlacementSink,
        tolerance: int = 0,
        bus=pub,
    ):
        """Initialize the session.

        Args:
            source: Returns the current monitors
            sink: Receives placements, returns (command, error) failures
            tolerance: Grid grouping tolerance in pixels
            bus: Event bus instance (Pypubsub)
        """
        self.source = source
        self.sink = sink
        self.tolerance = tolerance
        self.bus = bus
        self.grid: Optional[ScreenGrid] = None

    def refresh(self) -> ScreenGrid:
        """Rebuild the grid from the monitor source and pad it."""
        monitors = self.source()
        self.bus.sendMessage(topics.OUTPUTS_REFRESHED, monitors=monitors)

        self.grid = ScreenGrid.from_monitors(monitors, self.tolerance)
        self.bus.sendMessage(topics.GRID_BUILT, grid=self.grid)

        self.grow()
        return self.grid

    def _require_grid(self) -> ScreenGrid:
        if self.grid is None:
            raise RuntimeError("refresh() must be called before editing the grid")
        return self.grid

    def grow(self):
        grid = self._require_grid()
        grid.grow()
        self.bus.sendMessage(topics.GRID_GROWN, grid=grid)

    def shrink(self):
        grid = self._require_grid()
        grid.shrink()
        self.bus.sendMessage(topics.GRID_SHRUNK, grid=grid)

    def move_monitor(self, src: CellIndex, dst: CellIndex) -> bool:
        """Move a monitor into an empty cell.

        Returns:
            True if the monitor was moved
        """
        grid = self._require_grid()
        reason = None
        if not grid.in_bounds(src) or not grid.in_bounds(dst):
            reason = f"cell outside of {grid.rows}x{grid.cols} grid"
        elif grid.is_empty(src):
            reason = "source cell is empty"
        elif not grid.is_empty(dst):
            reason = "destination cell is occupied"

        if reason:
            self.bus.sendMessage(topics.MOVE_REJECTED, src=src, dst=dst, reason=reason)
            return False

        monitor = grid[src]
        grid.move(src, dst)
        self.bus.sendMessage(topics.CELL_MOVED, src=src, dst=dst, monitor=monitor)
        return True

    def apply(self) -> List[Monitor]:
        """Send the grid's placements to the sink and start over.

        Returns:
            The placements that were sent
        """
        placements = self._require_grid().placements()
        failures = self.sink(placements)
        for command, error in failures:
            print(f"Session: Warning: '{command}' failed: {error}")
        self.bus.sendMessage(
            topics.LAYOUT_APPLIED, placements=placements, failures=failures
        )
        self.refresh()
        return placements
