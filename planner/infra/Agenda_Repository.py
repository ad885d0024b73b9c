"""Snapshot repository: reads and writes the agenda, default schedule and theme namespaces.

Loading is forgiving: a missing, unreadable or malformed snapshot is logged
and treated as "no prior state". Saving is best-effort: failures are logged
and the in-memory state is kept.
"""
import json
import logging
from typing import Optional

from pydantic import ValidationError

from planner.domain.Agenda import Agenda
from planner.domain.DefaultSchedule import DefaultSchedule
from planner.domain.Theme import Theme
from planner.infra.Storage import Storage
from planner.utilities.constants import AGENDA_NAMESPACE, DEFAULTS_NAMESPACE, THEME_NAMESPACE
from planner.utilities.validators import AgendaSnapshot, DefaultsSnapshot

logger = logging.getLogger(__name__)


class AgendaRepository:
    def __init__(self, storage: Storage):
        self.storage = storage

    # --- Low level ------------------------------------------------------------
    def _read(self, namespace: str) -> Optional[str]:
        try:
            return self.storage.load(namespace)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {namespace}: {e}. Starting empty.")
            return None

    def _read_json(self, namespace: str):
        blob = self._read(namespace)
        if blob is None:
            return None
        try:
            return json.loads(blob)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in {namespace}: {e}. Starting empty.")
            return None

    def _write(self, namespace: str, data) -> bool:
        try:
            blob = json.dumps(data, indent=2, ensure_ascii=False)
            self.storage.save(namespace, blob)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save {namespace}: {e}")
            return False

    # --- Agenda ---------------------------------------------------------------
    def load_agenda(self, agenda: Agenda) -> Agenda:
        data = self._read_json(AGENDA_NAMESPACE)
        if data is None:
            return agenda.from_dict({})
        try:
            snapshot = AgendaSnapshot.model_validate(data)
            agenda.from_dict(snapshot.to_plain())
        except (ValidationError, ValueError) as e:
            logger.warning(f"Malformed agenda snapshot ignored: {e}")
            agenda.from_dict({})
        else:
            logger.info("Loaded agenda with %d days", len(agenda))
        return agenda

    def save_agenda(self, agenda: Agenda) -> bool:
        return self._write(AGENDA_NAMESPACE, agenda.to_dict())

    # --- Default schedule -----------------------------------------------------
    def load_defaults(self, defaults: DefaultSchedule) -> DefaultSchedule:
        data = self._read_json(DEFAULTS_NAMESPACE)
        if data is None:
            return defaults.from_dict({})
        try:
            snapshot = DefaultsSnapshot.model_validate(data)
            defaults.from_dict(snapshot.root)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Malformed default schedule ignored: {e}")
            defaults.from_dict({})
        return defaults

    def save_defaults(self, defaults: DefaultSchedule) -> bool:
        return self._write(DEFAULTS_NAMESPACE, defaults.to_dict())

    # --- Theme ----------------------------------------------------------------
    def load_theme(self) -> str:
        blob = self._read(THEME_NAMESPACE)
        if blob is None:
            return Theme.from_stored(None)
        try:
            raw = json.loads(blob)
        except json.JSONDecodeError:
            # plain text 'dark' / 'light' is accepted too
            raw = blob.strip()
        return Theme.from_stored(raw)

    def save_theme(self, theme: Theme) -> bool:
        return self._write(THEME_NAMESPACE, theme.value)
