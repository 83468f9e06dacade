"""
Monitor Setup Tool

Text front end for arranging sway outputs on a grid.
"""

from __future__ import annotations
import os
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

from pubsub import pub

from . import topics
from .grid import ScreenGrid, placement_command
from .ipc import SwayIPC, IPCError
from .preview import GridPreviewRenderer, GridPreviewStyle
from .protocol import InvalidInput, Monitor
from .session import EditSession

TITLE = "Sway Multi Monitor Setup"

HELP = """Commands:
  move R C R C   move the monitor at the first cell into the empty second cell
  grow           add empty rows/columns around the monitors
  shrink         remove empty border rows/columns
  apply          send the new positions to sway and reload
  refresh        reload the outputs from sway
  show           print the grid
  preview PATH   save a PNG picture of the grid
  help           show this help
  quit           leave without applying"""


Color = Tuple[int, int, int, int]


def parse_color(color: str | Color) -> Color:
    """
    Turn a preview color into an RGBA tuple.

    Colors are given as "#RRGGBB", "#RRGGBBAA" or an (R, G, B, A) tuple
    with 0-255 channels. Hex colors without alpha are opaque.
    """
    if isinstance(color, tuple):
        if len(color) != 4 or not all(0 <= c <= 0xFF for c in color):
            raise ValueError(f"Invalid RGBA tuple: {color}")
        return color
    if not isinstance(color, str):
        raise ValueError(
            f"Invalid color type: {type(color)}. Use hex string or RGBA tuple"
        )

    digits = color.lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"Invalid color format: {color}. Use #RRGGBB or #RRGGBBAA")
    try:
        channels = tuple(bytes.fromhex(digits))
    except ValueError:
        raise ValueError(f"Invalid hex digits in color: {color}") from None
    # Opaque unless alpha given
    return channels + (0xFF,) if len(channels) == 3 else channels


def describe_event_value(value) -> str:
    """Short text for an event argument: grids by shape, monitors by name."""
    if isinstance(value, ScreenGrid):
        return f"{value.rows}x{value.cols} grid"
    if isinstance(value, Monitor):
        return value.name
    if isinstance(value, list) and all(isinstance(v, Monitor) for v in value):
        return "[" + ", ".join(m.name for m in value) + "]"
    return repr(value)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes", "on")


@dataclass
class MonitorSetupConfig:
    """Monitor setup configuration."""

    # IPC socket (None: $SWAYSOCK / $I3SOCK)
    socket_path: Optional[str] = None

    # Grid grouping tolerance in pixels (0 = exact x/y alignment)
    tolerance: int = 0

    # Also arrange disabled outputs
    include_inactive: bool = False

    # Print commands instead of sending them to sway
    dry_run: bool = False

    # Preview image
    preview_cell_size: int = 108
    preview_background_color: str | Color = "#2e3440"
    preview_cell_color: str | Color = "#5e81ac"
    preview_empty_color: str | Color = "#3b4252"
    preview_text_color: str | Color = "#d8dee9"

    def __post_init__(self):
        """Validate values and parse color strings into tuples."""
        if self.tolerance < 0:
            raise ValueError(f"Tolerance must not be negative: {self.tolerance}")
        self.preview_background_color = parse_color(self.preview_background_color)
        self.preview_cell_color = parse_color(self.preview_cell_color)
        self.preview_empty_color = parse_color(self.preview_empty_color)
        self.preview_text_color = parse_color(self.preview_text_color)

    @classmethod
    def from_env(cls) -> "MonitorSetupConfig":
        """Configuration with SWAYSOCK, SMM_TOLERANCE and SMM_DRY_RUN applied."""
        tolerance = os.getenv("SMM_TOLERANCE", "0")
        try:
            tolerance_px = int(tolerance)
        except ValueError:
            raise ValueError(f"Invalid SMM_TOLERANCE: {tolerance!r}") from None
        return cls(
            socket_path=os.getenv("SWAYSOCK"),
            tolerance=tolerance_px,
            dry_run=_env_flag("SMM_DRY_RUN"),
        )

    def preview_style(self) -> GridPreviewStyle:
        # Colors are already parsed into tuples in __post_init__
        assert isinstance(self.preview_background_color, tuple)
        assert isinstance(self.preview_cell_color, tuple)
        assert isinstance(self.preview_empty_color, tuple)
        assert isinstance(self.preview_text_color, tuple)

        return GridPreviewStyle(
            cell_size=self.preview_cell_size,
            background_color=self.preview_background_color,
            cell_color=self.preview_cell_color,
            empty_color=self.preview_empty_color,
            text_color=self.preview_text_color,
        )


class MonitorSetup:
    """
    Monitor Setup

    Reads commands line by line and edits the output layout of a running
    sway session.
    """

    def __init__(
        self,
        config: Optional[MonitorSetupConfig] = None,
        ipc: Optional[SwayIPC] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.config = config or MonitorSetupConfig()
        self.ipc = ipc or SwayIPC(self.config.socket_path)
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

        if os.getenv("SMM_DEBUG"):
            pub.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self.session = EditSession(
            source=lambda: self.ipc.get_monitors(self.config.include_inactive),
            sink=self._dry_run_sink if self.config.dry_run else self.ipc.apply,
            tolerance=self.config.tolerance,
            bus=pub,
        )
        self.renderer = GridPreviewRenderer(self.config.preview_style())

        pub.subscribe(self._on_cell_moved, topics.CELL_MOVED)
        pub.subscribe(self._on_move_rejected, topics.MOVE_REJECTED)

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Print every bus event with its arguments in short form."""
        data_str = ", ".join(
            f"{k}={describe_event_value(v)}" for k, v in kwargs.items() if k != "topic"
        )
        print(f"[{time.strftime('%H:%M:%S')}] EVENT: {topic.getName()} | {data_str}")

    def _dry_run_sink(self, placements: List[Monitor]) -> List[Tuple[str, str]]:
        for monitor in placements:
            self._write(f"Would run: {placement_command(monitor)}")
        return []

    def _on_cell_moved(self, src, dst, monitor):
        self._write(f"Moving {monitor.name}: {src[0]}x{src[1]} => {dst[0]}x{dst[1]}")

    def _on_move_rejected(self, src, dst, reason):
        self._write(f"Cannot move {src} => {dst}: {reason}")

    def _write(self, text: str):
        print(text, file=self.stdout)

    def show(self):
        self._write(self.session.grid.format())

    def handle_command(self, line: str) -> bool:
        """Execute one command line.

        Returns:
            False when the loop should stop
        """
        parts = line.split()
        if not parts:
            return True
        command, args = parts[0], parts[1:]

        if command in ("quit", "exit", "q"):
            return False
        elif command == "help":
            self._write(HELP)
        elif command == "show":
            self.show()
        elif command == "move":
            try:
                src_row, src_col, dst_row, dst_col = (int(a) for a in args)
            except ValueError:
                self._write("Usage: move R C R C")
                return True
            if self.session.move_monitor((src_row, src_col), (dst_row, dst_col)):
                self.show()
        elif command == "grow":
            self.session.grow()
            self.show()
        elif command == "shrink":
            self.session.shrink()
            self.show()
        elif command == "apply":
            self.session.apply()
            self._write("Getting new layout from sway:")
            self.show()
        elif command == "refresh":
            self.session.refresh()
            self.show()
        elif command == "preview":
            if len(args) != 1:
                self._write("Usage: preview PATH")
                return True
            self.renderer.write_png(self.session.grid, args[0])
            self._write(f"Preview written to {args[0]}")
        else:
            self._write(f"Unknown command: {command} (try 'help')")
        return True

    def run(self) -> int:
        """Run the command loop."""
        try:
            try:
                self.session.refresh()
            except (IPCError, InvalidInput) as e:
                print(f"Failed to read outputs from sway: {e}")
                return 1

            self._write(TITLE)
            self._write("With gaps:")
            self.show()

            for line in self.stdin:
                try:
                    if not self.handle_command(line):
                        break
                except (IPCError, InvalidInput) as e:
                    self._write(f"Error: {e}")
        except KeyboardInterrupt:
            pass
        finally:
            self.ipc.close()

        return 0


def main():
    """Main entry point."""
    config = MonitorSetupConfig.from_env()
    setup = MonitorSetup(config)
    return setup.run()


if __name__ == "__main__":
    sys.exit(main())
