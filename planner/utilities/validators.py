"""
Input validation schemas using Pydantic: API request bodies and the shape of
persisted snapshots.
"""
import re
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, RootModel, field_validator

from planner.utilities.constants import PERIODS

PERIOD_KEY_PATTERN = r'^[0-6]$'
DATE_KEY_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


class FieldUpdateInput(BaseModel):
    """Schema for editing one field of one period."""
    field: Literal['subject', 'notes', 'homework']
    value: str


class DefaultUpdateInput(BaseModel):
    """Schema for editing a default subject."""
    value: str


class ThemeInput(BaseModel):
    """Schema for setting the appearance."""
    theme: Literal['light', 'dark']


# --- Persisted snapshot shapes ---------------------------------------------

class PeriodRecordSnapshot(BaseModel):
    """One period as stored. Absent keys stay absent (see model_dump(exclude_unset=True))."""
    model_config = ConfigDict(extra='ignore')

    subject: Optional[str] = None
    notes: Optional[str] = None
    homework: Optional[str] = None

    @field_validator('subject', 'notes', 'homework')
    @classmethod
    def reject_null(cls, v):
        """null is not a valid stored value; only absence or a string is."""
        if v is None:
            raise ValueError('field must be a string when present')
        return v


class AgendaSnapshot(RootModel[Dict[str, Dict[str, PeriodRecordSnapshot]]]):
    """{"YYYY-MM-DD": {"<period>": PeriodRecordSnapshot}}"""

    @field_validator('root')
    @classmethod
    def check_keys(cls, v):
        """Date keys must look like YYYY-MM-DD and periods must be 0..6."""
        for key, periods in v.items():
            if not re.fullmatch(DATE_KEY_PATTERN, key):
                raise ValueError(f'invalid date key {key!r}')
            for p in periods:
                if not re.fullmatch(PERIOD_KEY_PATTERN, p):
                    raise ValueError(f'invalid period {p!r} for {key}')
        return v

    def to_plain(self) -> dict:
        return {
            key: {p: rec.model_dump(exclude_unset=True) for p, rec in periods.items()}
            for key, periods in self.root.items()
        }


class DefaultsSnapshot(RootModel[Dict[str, str]]):
    """{"<period>": "subject"}"""

    @field_validator('root')
    @classmethod
    def check_periods(cls, v):
        """Periods must be 0..6."""
        allowed = {str(p) for p in PERIODS}
        bad = [p for p in v if p not in allowed]
        if bad:
            raise ValueError(f'invalid periods {bad!r}')
        return v
