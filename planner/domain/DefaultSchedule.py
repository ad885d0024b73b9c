"""DefaultSchedule domain entity: default subject per period, used for days without an explicit one."""
from typing import Dict, List, Optional
from planner.domain.PeriodRecord import check_period
from planner.events.Event_Bus import EventBus, SCHEDULE_CHANGED
from planner.utilities.constants import PERIODS


class DefaultSchedule:
    def __init__(self, event_bus: Optional[EventBus] = None):
        self.subjects: Dict[int, str] = {}
        self._event_bus = event_bus or EventBus()

    def set_event_bus(self, bus: EventBus):
        self._event_bus = bus
        return self

    def get_default(self, period: int) -> str:
        return self.subjects.get(check_period(period), "")

    def set_default(self, period: int, value: str):
        '''
        Overwrites the default for one period. Days that already have an
        explicit subject keep it.
        '''
        period = check_period(period)
        if not isinstance(value, str):
            raise ValueError(f"Default subject must be a string, got {type(value).__name__}")
        self.subjects[period] = value
        self._event_bus.publish(SCHEDULE_CHANGED, {"period": period, "value": value})

    def as_list(self) -> List[str]:
        return [self.get_default(p) for p in PERIODS]

    def __str__(self) -> str:
        return f"DefaultSchedule({self.as_list()})"

    __repr__ = __str__

    def to_dict(self):
        return {str(p): v for p, v in sorted(self.subjects.items())}

    def from_dict(self, data):
        subjects = {}
        for p, v in (data or {}).items():
            if not isinstance(v, str):
                raise ValueError(f"Default subject for period {p!r} must be a string")
            subjects[check_period(p)] = v
        self.subjects = subjects
        return self
