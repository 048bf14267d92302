"""Hook events fired while a table is rendered."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple


class EventType(Enum):
    """Points in the render sequence where handlers may draw decoration."""
    BEFORE_TABLE = "before_table"
    AFTER_TABLE = "after_table"
    BEFORE_ROW = "before_row"
    AFTER_ROW = "after_row"
    BEFORE_CELL = "before_cell"
    AFTER_CELL = "after_cell"
    BEGIN_PAGE = "begin_page"
    END_PAGE = "end_page"


@dataclass(frozen=True)
class TableEvent:
    """Geometry of the element being rendered plus the drawing handles."""
    type: EventType
    document: Any  # PdfDocument
    page: Any      # PageCanvas
    left: float
    top: float
    width: float
    height: float


EventHandler = Callable[[TableEvent], None]


class EventSource:
    """Keeps ordered handler lists per event type."""

    def __init__(self):
        self._event_handlers: Dict[EventType, List[EventHandler]] = {}

    def add_event_handler(self, event_type: EventType, handler: EventHandler):
        """Register handler for event_type; handlers run in registration order."""
        self._event_handlers.setdefault(event_type, []).append(handler)
        return self

    def handlers_for(self, event_type: EventType) -> Tuple[EventHandler, ...]:
        return tuple(self._event_handlers.get(event_type, ()))

    def fire_event(
        self,
        event_type: EventType,
        document,
        page,
        left: float,
        top: float,
        width: float,
        height: float,
    ) -> None:
        """Call every handler registered for event_type, synchronously.

        The handler list is frozen when the event fires, so a handler that
        registers another handler does not affect the current dispatch.
        """
        handlers = self.handlers_for(event_type)
        if not handlers:
            return
        event = TableEvent(event_type, document, page, left, top, width, height)
        for handler in handlers:
            handler(event)
