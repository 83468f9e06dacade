"""
Sway Multi Monitor setup (smm)

Arranges sway outputs on a grid that can be edited and applied back.

This package provides:
- Monitor value types
- The screen grid: building, padding, moving cells, computing positions
- A sway IPC client to read outputs and run placement commands
- An edit session publishing events on a Pypubsub bus
- A cairo preview of the grid
- A text front end

Example usage:
    from smm import ScreenGrid, SwayIPC

    with SwayIPC() as ipc:
        grid = ScreenGrid.from_monitors(ipc.get_monitors())
        grid.grow()
        grid.move((1, 3), (0, 2))
        ipc.apply(grid.placements())

Or run directly:
    python -m smm
"""

__version__ = "0.1.0"

from .protocol import CellIndex, InvalidInput, Monitor

from .grid import ScreenGrid, split_by, placement_command

from .ipc import SwayIPC, IPCError, MessageType

from .session import EditSession

from .preview import GridPreviewRenderer, GridPreviewStyle

from .monitor_setup import MonitorSetup, MonitorSetupConfig, parse_color

from . import topics

__all__ = [
    # Version
    "__version__",
    # Data types
    "CellIndex",
    "InvalidInput",
    "Monitor",
    # Grid
    "ScreenGrid",
    "split_by",
    "placement_command",
    # IPC
    "SwayIPC",
    "IPCError",
    "MessageType",
    # Session
    "EditSession",
    # Preview
    "GridPreviewRenderer",
    "GridPreviewStyle",
    # Front end
    "MonitorSetup",
    "MonitorSetupConfig",
    "parse_color",
    # Event topics
    "topics",
]
