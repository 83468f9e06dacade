"""
Event Topics for smm

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

Every topic is always sent with the same keyword arguments, listed below.
"""

# Monitor source events
OUTPUTS_REFRESHED = "outputs.refreshed"
"""Published after the monitor source was read. Params: monitors"""

# Grid events
GRID_BUILT = "grid.built"
"""Published when a grid was built from fresh monitors. Params: grid"""

GRID_GROWN = "grid.grown"
"""Published after empty border rows/columns were added. Params: grid"""

GRID_SHRUNK = "grid.shrunk"
"""Published after empty border rows/columns were removed. Params: grid"""

CELL_MOVED = "grid.cell_moved"
"""Published when a monitor moved to another cell. Params: src, dst, monitor"""

MOVE_REJECTED = "grid.move_rejected"
"""Published when a requested move was refused. Params: src, dst, reason"""

# Placement sink events
LAYOUT_APPLIED = "layout.applied"
"""Published after placements were sent to the sink. Params: placements, failures"""
