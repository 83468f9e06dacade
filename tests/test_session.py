"""
Unit tests for EditSession.
"""

import pytest
from pubsub import pub

from smm import topics
from smm.protocol import InvalidInput, Monitor
from smm.session import EditSession


class FakeSway:
    """Monitor source and placement sink backed by a list of monitors."""

    def __init__(self, monitors, failures=None):
        self.monitors = list(monitors)
        self.failures = failures or []
        self.applied = []

    def get_monitors(self):
        return list(self.monitors)

    def apply(self, placements):
        self.applied.append(placements)
        # Pretend the compositor moved the outputs
        self.monitors = list(placements)
        return self.failures


@pytest.fixture
def events():
    """Record grid events published during a test."""
    recorded = []

    def on_built(grid):
        recorded.append(("built", grid.shape))

    def on_grown(grid):
        recorded.append(("grown", grid.shape))

    def on_shrunk(grid):
        recorded.append(("shrunk", grid.shape))

    def on_moved(src, dst, monitor):
        recorded.append(("moved", src, dst, monitor.name))

    def on_rejected(src, dst, reason):
        recorded.append(("rejected", src, dst, reason))

    def on_applied(placements, failures):
        recorded.append(("applied", [m.name for m in placements], failures))

    listeners = [
        (on_built, topics.GRID_BUILT),
        (on_grown, topics.GRID_GROWN),
        (on_shrunk, topics.GRID_SHRUNK),
        (on_moved, topics.CELL_MOVED),
        (on_rejected, topics.MOVE_REJECTED),
        (on_applied, topics.LAYOUT_APPLIED),
    ]
    for listener, topic in listeners:
        pub.subscribe(listener, topic)
    yield recorded
    for listener, topic in listeners:
        pub.unsubscribe(listener, topic)


@pytest.fixture
def sway(laptop_and_hdmi):
    return FakeSway(laptop_and_hdmi)


@pytest.fixture
def session(sway):
    return EditSession(source=sway.get_monitors, sink=sway.apply)


@pytest.mark.unit
class TestEditSession:
    """Test orchestration of refresh, move and apply."""

    def test_refresh_builds_and_grows(self, session, events):
        grid = session.refresh()

        assert grid is session.grid
        assert grid.shape == (3, 4)
        assert events == [("built", (1, 2)), ("grown", (3, 4))]

    def test_refresh_empty_source(self):
        session = EditSession(source=lambda: [], sink=lambda placements: [])

        with pytest.raises(InvalidInput):
            session.refresh()

    def test_edit_before_refresh(self, session):
        with pytest.raises(RuntimeError):
            session.move_monitor((1, 1), (0, 1))

    def test_move_into_empty_cell(self, session, events):
        session.refresh()

        assert session.move_monitor((1, 2), (2, 1)) is True
        assert session.grid[2, 1].name == "eDP-1"
        assert session.grid[1, 2] is None
        assert events[-1] == ("moved", (1, 2), (2, 1), "eDP-1")

    def test_move_into_occupied_cell_rejected(self, session, events):
        session.refresh()
        before = session.grid.copy()

        assert session.move_monitor((1, 2), (1, 1)) is False
        assert session.grid == before
        assert events[-1] == (
            "rejected",
            (1, 2),
            (1, 1),
            "destination cell is occupied",
        )

    def test_move_from_empty_cell_rejected(self, session, events):
        session.refresh()

        assert session.move_monitor((0, 0), (0, 1)) is False
        assert events[-1][-1] == "source cell is empty"

    def test_move_out_of_range_rejected(self, session, events):
        session.refresh()

        assert session.move_monitor((1, 2), (5, 5)) is False
        assert events[-1][0] == "rejected"

    def test_shrink_and_grow(self, session, events):
        session.refresh()
        session.shrink()
        assert session.grid.shape == (1, 2)

        session.grow()
        assert session.grid.shape == (3, 4)
        assert events[-2:] == [("shrunk", (1, 2)), ("grown", (3, 4))]

    def test_apply_sends_placements_and_refreshes(self, session, sway, events):
        session.refresh()
        session.move_monitor((1, 2), (2, 1))

        placements = session.apply()

        positions = {m.name: (m.x, m.y) for m in placements}
        assert positions == {"HDMI-A-1": (0, 0), "eDP-1": (0, 1080)}
        assert sway.applied == [placements]
        assert ("applied", ["HDMI-A-1", "eDP-1"], []) in events

        # The grid was rebuilt from the new outputs: one column, two rows
        assert session.grid.shape == (4, 3)
        assert session.grid[1, 1].name == "HDMI-A-1"
        assert session.grid[2, 1].name == "eDP-1"

    def test_apply_reports_failures(self, laptop, capsys):
        failure = ("output eDP-1 pos 0 0", "Unknown output")
        sway = FakeSway([laptop], failures=[failure])
        session = EditSession(source=sway.get_monitors, sink=sway.apply)
        session.refresh()

        session.apply()

        assert "Unknown output" in capsys.readouterr().out

    def test_tolerance_passed_to_grid(self):
        monitors = [Monitor("A", 0, 0, 1920, 1080), Monitor("B", 1920, 8, 1920, 1080)]
        session = EditSession(
            source=lambda: monitors, sink=lambda placements: [], tolerance=10
        )

        assert session.refresh().shape == (3, 4)
