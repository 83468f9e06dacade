"""
Shared pytest fixtures for smm tests.
"""

import pytest
from smm.protocol import Monitor


@pytest.fixture
def laptop():
    """Single 1920x1200 laptop panel at the origin."""
    return Monitor("eDP-1", 0, 0, 1920, 1200)


@pytest.fixture
def laptop_and_hdmi():
    """Laptop panel right of an HDMI screen."""
    return [
        Monitor("eDP-1", 1920, 0, 1920, 1200),
        Monitor("HDMI-A-1", 0, 0, 1920, 1080),
    ]


@pytest.fixture
def three_in_a_row():
    """Three screens side by side, top aligned."""
    return [
        Monitor("eDP-1", 0, 0, 1920, 1200),
        Monitor("DP-1", 1920, 0, 2560, 1440),
        Monitor("DP-2", 4480, 0, 2560, 1600),
    ]


@pytest.fixture
def two_by_two():
    """Four equal screens in a 2x2 block."""
    return [
        Monitor("DP-1", 0, 0, 1920, 1080),
        Monitor("DP-2", 1920, 0, 1920, 1080),
        Monitor("DP-3", 0, 1080, 1920, 1080),
        Monitor("DP-4", 1920, 1080, 1920, 1080),
    ]


@pytest.fixture
def sway_outputs():
    """GET_OUTPUTS reply with one disabled output."""
    return [
        {
            "name": "eDP-1",
            "active": True,
            "rect": {"x": 1920, "y": 0, "width": 1920, "height": 1200},
        },
        {
            "name": "HDMI-A-1",
            "active": True,
            "rect": {"x": 0, "y": 0, "width": 1920, "height": 1080},
        },
        {
            "name": "DP-3",
            "active": False,
            "rect": {"x": 0, "y": 0, "width": 0, "height": 0},
        },
    ]
