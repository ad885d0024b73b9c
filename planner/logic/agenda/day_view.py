from datetime import date
from typing import Optional

from planner.logic.dates.date_keys import (
    current_date, to_key, to_display_label, to_short_label, is_relative_label, shift_day
)
from planner.utilities.constants import PERIODS, SUBJECT_PLACEHOLDER


def build_period_view(state, key: str, period: int) -> dict:
    """One period panel: resolved subject plus the raw notes/homework text."""
    record = state.agenda.get_period(key, period)
    default = state.defaults.get_default(period)
    homework = record.homework or ""
    return {
        "period": period,
        "subject": state.agenda.resolve_subject(key, period, state.defaults),
        "subject_is_explicit": record.subject is not None,
        "placeholder": default or SUBJECT_PLACEHOLDER,
        "notes": record.notes or "",
        "homework": homework,
        "has_homework": bool(homework),
    }


def build_day_view(state, day: date, today: Optional[date] = None) -> dict:
    """Everything the day screen shows for `day`, including the neighbouring day keys."""
    if today is None:
        today = current_date()
    key = to_key(day)
    label = to_display_label(day, today=today)
    return {
        "date": key,
        "label": label,
        "short_label": to_short_label(day) if is_relative_label(label) else None,
        "is_today": key == to_key(today),
        "previous": to_key(shift_day(day, -1)),
        "next": to_key(shift_day(day, 1)),
        "theme": state.theme.value,
        "periods": [build_period_view(state, key, p) for p in PERIODS],
    }
