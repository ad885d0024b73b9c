"""Theme preference: light or dark appearance."""
from typing import Optional
from planner.events.Event_Bus import EventBus, THEME_CHANGED
from planner.utilities.constants import THEMES, THEME_LIGHT, THEME_DARK


class Theme:
    def __init__(self, value: str = THEME_LIGHT, event_bus: Optional[EventBus] = None):
        self.value = self._check(value)
        self._event_bus = event_bus or EventBus()

    @staticmethod
    def _check(value: str) -> str:
        if value not in THEMES:
            raise ValueError(f"Invalid theme '{value}' (expected one of {', '.join(THEMES)})")
        return value

    def set_event_bus(self, bus: EventBus):
        self._event_bus = bus
        return self

    @property
    def is_dark(self) -> bool:
        return self.value == THEME_DARK

    def set(self, value: str):
        self.value = self._check(value)
        self._event_bus.publish(THEME_CHANGED, {"theme": self.value})

    def toggle(self) -> str:
        self.set(THEME_LIGHT if self.is_dark else THEME_DARK)
        return self.value

    @staticmethod
    def from_stored(raw) -> str:
        '''Only an explicit "dark" selects dark mode; anything else is light.'''
        return THEME_DARK if raw == THEME_DARK else THEME_LIGHT

    def __str__(self) -> str:
        return self.value
