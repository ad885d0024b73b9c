"""PeriodRecord domain entity: subject, notes and homework for one period of one day.

Every field is tri-state: None means the user never touched it, "" means the
user cleared it. Only `subject` gives the difference a meaning (an unset
subject falls back to the default schedule, a cleared one stays blank).
"""
from typing import Optional
from planner.utilities.constants import PERIOD_FIELDS, PERIODS


def check_period(period) -> int:
    '''Accepts 0..6 as int (or a digit string, as JSON object keys are).'''
    if isinstance(period, bool):
        raise ValueError(f"Invalid period: {period!r}")
    if isinstance(period, str) and period.strip().isdigit():
        period = int(period)
    if not isinstance(period, int) or period not in PERIODS:
        raise ValueError(f"Invalid period: {period!r} (expected {PERIODS[0]}-{PERIODS[-1]})")
    return period


def check_field(field: str) -> str:
    if field not in PERIOD_FIELDS:
        raise ValueError(f"Unknown field '{field}' (expected one of {', '.join(PERIOD_FIELDS)})")
    return field


class PeriodRecord:
    def __init__(self, subject: Optional[str] = None, notes: Optional[str] = None,
                 homework: Optional[str] = None):
        self.subject = subject
        self.notes = notes
        self.homework = homework

    def get(self, field: str) -> Optional[str]:
        return getattr(self, check_field(field))

    def set(self, field: str, value: str):
        '''Sets exactly one field; the others keep their state.'''
        check_field(field)
        if not isinstance(value, str):
            raise ValueError(f"Value for '{field}' must be a string, got {type(value).__name__}")
        setattr(self, field, value)

    def has(self, field: str) -> bool:
        return self.get(field) is not None

    def is_empty(self) -> bool:
        return all(getattr(self, f) is None for f in PERIOD_FIELDS)

    def copy(self) -> "PeriodRecord":
        return PeriodRecord(self.subject, self.notes, self.homework)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PeriodRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"PeriodRecord({self.to_dict()!r})"

    @staticmethod
    def from_dict(data):
        '''Creates a PeriodRecord from a dictionary. Ignores unknown keys and non-string values.'''
        d = data if isinstance(data, dict) else {}
        return PeriodRecord(**{f: d[f] for f in PERIOD_FIELDS if isinstance(d.get(f), str)})

    def to_dict(self):
        '''Converts to a dictionary for JSON persistence; unset fields are omitted, "" is kept.'''
        return {f: getattr(self, f) for f in PERIOD_FIELDS if getattr(self, f) is not None}
