from src.services import (
    display_service,
    event_service,
    shopping_state_machine,
)


__all__ = [
    "display_service",
    "event_service",
    "shopping_state_machine",
]
