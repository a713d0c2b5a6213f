"""
Event Topics for exposewm

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>
"""

# Window lifecycle events
WINDOW_CREATED = "window.created"
"""Published when a window is added to the scene. Params: window"""

WINDOW_CLOSED = "window.closed"
"""Published when a window is removed from the scene. Params: window"""

WINDOW_UNPLACED = "window.unplaced"
"""Published when a layout could not place a window. Params: window, layout_name"""

# Layout notifications
LAYOUT_APPLIED = "layout.applied"
"""Published after a layout updated the scene. Params: layout_name, placed, unplaced"""

LAYOUT_CHANGED = "layout.changed"
"""Published when the active layout changes. Params: layout_name"""

EXPOSE_STEP_CHANGED = "expose.step_changed"
"""Published when the stepped expose progress changes. Params: step"""

# Command events (imperative - tell components to do something)
# These are triggered by key bindings

CMD_EXPOSE = "cmd.expose"
"""Command: Arrange windows in the expose grid."""

CMD_EXPOSE_STEP = "cmd.expose_step"
"""Command: Advance the stepped expose by one increment."""

CMD_RESET_STEP = "cmd.reset_step"
"""Command: Reset the stepped expose progress to zero."""

CMD_SHELF_PACK = "cmd.shelf_pack"
"""Command: Pack windows into shelf bins."""

CMD_MAXRECTS_PACK = "cmd.maxrects_pack"
"""Command: Pack windows into a single bin with scale search."""

CMD_NORMALIZE = "cmd.normalize"
"""Command: Reset windows to unit scale in a diagonal cascade."""

CMD_CYCLE_LAYOUT = "cmd.cycle_layout"
"""Command: Cycle to next layout and apply it."""

CMD_APPLY_LAYOUT = "cmd.apply_layout"
"""Command: Apply the active layout again."""

CMD_TICK = "cmd.tick"
"""Command: Advance the frame clock once."""

CMD_QUIT = "cmd.quit"
"""Command: Stop the engine."""
