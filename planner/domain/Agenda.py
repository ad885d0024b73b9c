"""Agenda aggregate: date key -> {period -> PeriodRecord}, with change notifications."""
from typing import Dict, List, Optional
from planner.domain.PeriodRecord import PeriodRecord, check_field, check_period
from planner.events.Event_Bus import EventBus, AGENDA_CHANGED
from planner.logic.dates.date_keys import parse_key

DayRecord = Dict[int, PeriodRecord]


class Agenda:
    def __init__(self, event_bus: Optional[EventBus] = None):
        self.days: Dict[str, DayRecord] = {}
        self._event_bus = event_bus or EventBus()

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus: EventBus):
        self._event_bus = bus
        return self

    def _notify_changed(self, key: str, period: int, field: str, value: str):
        self._event_bus.publish(AGENDA_CHANGED, {
            "date": key,
            "period": period,
            "field": field,
            "value": value,
        })

    # --- Reads -------------------------------------------------------------
    def get_day(self, key: str) -> DayRecord:
        '''
        Returns a copy of the day's periods, or {} when nothing was recorded.
        Reading never creates entries.
        '''
        day = self.days.get(key, {})
        return {p: record.copy() for p, record in day.items()}

    def get_period(self, key: str, period: int) -> PeriodRecord:
        period = check_period(period)
        record = self.days.get(key, {}).get(period)
        return record.copy() if record is not None else PeriodRecord()

    def day_keys(self) -> List[str]:
        return sorted(self.days)

    def resolve_subject(self, key: str, period: int, defaults) -> str:
        '''
        Explicit subject if one was ever set (even ""), else the default
        schedule's subject for the period, else "".
        '''
        record = self.get_period(key, period)
        if record.subject is not None:
            return record.subject
        return defaults.get_default(period)

    # --- Writes ------------------------------------------------------------
    def set_field(self, key: str, period: int, field: str, value: str):
        '''
        Sets one field of one period of one day, creating the day and period
        on first edit. Everything else is left as it was.
        '''
        parse_key(key)
        period = check_period(period)
        check_field(field)
        if not isinstance(value, str):
            raise ValueError(f"Value for '{field}' must be a string, got {type(value).__name__}")
        day = self.days.setdefault(key, {})
        record = day.setdefault(period, PeriodRecord())
        record.set(field, value)
        self._notify_changed(key, period, field, value)

    def __len__(self) -> int:
        return len(self.days)

    def __str__(self) -> str:
        return f"Agenda({len(self.days)} days)"

    __repr__ = __str__

    # --- Serialization -----------------------------------------------------
    def to_dict(self):
        '''
        Converts the agenda to {"YYYY-MM-DD": {"<period>": {field: value}}}.
        Period keys become strings since JSON object keys are strings.
        '''
        return {
            key: {str(p): record.to_dict() for p, record in sorted(day.items())}
            for key, day in sorted(self.days.items())
        }

    def from_dict(self, data):
        '''
        Replaces the contents from a snapshot produced by to_dict().
        Raises ValueError on bad keys or periods; nothing is published.
        '''
        days: Dict[str, DayRecord] = {}
        for key, periods in (data or {}).items():
            parse_key(key)
            if not isinstance(periods, dict):
                raise ValueError(f"Day '{key}' must map periods to records")
            days[key] = {check_period(p): PeriodRecord.from_dict(rec) for p, rec in periods.items()}
        self.days = days
        return self
