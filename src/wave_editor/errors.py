"""Exception types raised by the editing core."""


class WaveEditorError(Exception):
    """Base exception for wave editor errors."""
    pass


class InvalidTypeDefinition(WaveEditorError):
    """Raised when a user-supplied event type definition cannot be parsed."""
    pass


class UnknownTrackError(WaveEditorError, KeyError):
    """Raised when a track id does not exist on the timeline."""

    def __init__(self, track_id: str):
        super().__init__(track_id)
        self.track_id = track_id

    def __str__(self) -> str:
        return f"Track '{self.track_id}' not found"


class UnknownEventError(WaveEditorError, KeyError):
    """Raised when an event id does not exist on any track."""

    def __init__(self, event_id: str):
        super().__init__(event_id)
        self.event_id = event_id

    def __str__(self) -> str:
        return f"Event '{self.event_id}' not found"


class DragFinished(WaveEditorError):
    """Raised when a committed or cancelled drag is used again."""
    pass
