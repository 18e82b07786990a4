"""Global constants for the application."""

# Timeline settings
DEFAULT_DURATION = 60.0  # Seconds
MIN_DURATION = 10.0  # Timeline duration never drops below this
DEFAULT_TIMELINE_NAME = "Untitled timeline"
DEFAULT_TIMELINE_ZOOM = 10  # Serialized legacy zoom field, not the interactive scale
DEFAULT_EVENT_TOLERANCE = 0.1  # Seconds either side when looking up events at a time

# Track settings
DEFAULT_TRACK_NAME = "New track"
TRACK_COLORS = ("#007acc", "#e74c3c", "#2ecc71", "#f39c12", "#9b59b6", "#1abc9c")

# Viewport settings (pixels per second)
DEFAULT_PIXELS_PER_SECOND = 50.0
MIN_PIXELS_PER_SECOND = 10.0
MAX_PIXELS_PER_SECOND = 200.0
ZOOM_FACTOR = 1.1  # Scale change per wheel notch
SNAP_INDICATOR_THRESHOLD = 0.1  # Seconds between raw and snapped drag time to show the indicator
MAJOR_TICK_EVERY = 5  # Every Nth ruler tick is a major tick

# Ruler tick interval (seconds) by timeline duration: (max duration, interval)
TICK_INTERVALS = (
    (30, 1),
    (60, 2),
    (120, 5),
    (300, 10),
)
LONG_TICK_INTERVAL = 30

# Event types
DEFAULT_EVENT_TYPE = "default"
SPAWN_EVENT_TYPE = "spawn_enemy"
DEFAULT_EVENT_COLOR = "#3498db"

# Enemy types
DEFAULT_ENEMY_ICON = "👾"
ENEMY_REGISTRY_KEY = "enemyTypes"  # Store key holding the enemy registry snapshot
