"""
Event Topics for the focuslayout engine

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

The engine never depends on anyone listening. Topics exist so callers,
overlays and debugging tools can observe a layout pass without the engine
knowing about them.
"""

# Layout lifecycle events
LAYOUT_STARTED = "layout.started"
"""Published when a layout pass begins. Params: request"""

LAYOUT_WARNING = "layout.warning"
"""Published for every recoverable problem found during a pass. Params: warning"""

LAYOUT_COMPUTED = "layout.computed"
"""Published when a layout pass finishes. Params: result"""

# Selection events
SELECTION_COMPLETED = "selection.completed"
"""Published once candidate apps have been scored and filtered. Params: selection"""
