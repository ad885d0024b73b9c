"""Planner state: the explicitly owned bundle of agenda, default schedule and theme.

Storage is injected. `load()` hydrates every store once from its snapshot and
subscribes the persistence observers, so each later mutation saves the full
snapshot of its namespace right away.
"""
from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Any, Optional

from planner.domain.Agenda import Agenda
from planner.domain.DefaultSchedule import DefaultSchedule
from planner.domain.Theme import Theme
from planner.events.Event_Bus import EventBus, AGENDA_CHANGED, SCHEDULE_CHANGED, THEME_CHANGED
from planner.infra.Agenda_Repository import AgendaRepository
from planner.infra.Storage import JsonFileStorage, Storage
from planner.utilities.config import DATA_DIR

logger = logging.getLogger(__name__)


class PlannerState:
    def __init__(self, storage: Storage, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus or EventBus()
        self.repository = AgendaRepository(storage)
        self.agenda = Agenda(self.event_bus)
        self.defaults = DefaultSchedule(self.event_bus)
        self.theme = Theme(event_bus=self.event_bus)
        self._loaded = False
        # one edit and its save complete before the next edit starts
        self._lock = Lock()

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self) -> "PlannerState":
        """Idempotent: hydrate from storage and start saving on change."""
        if self._loaded:
            return self
        self._hydrate()
        # subscribe only after hydration so loading never writes back
        self.event_bus.subscribe(AGENDA_CHANGED, self._persist_agenda)
        self.event_bus.subscribe(SCHEDULE_CHANGED, self._persist_defaults)
        self.event_bus.subscribe(THEME_CHANGED, self._persist_theme)
        self._loaded = True
        logger.info("Planner state loaded (theme=%s)", self.theme.value)
        return self

    def reload(self) -> "PlannerState":
        """Re-read every namespace, e.g. after a backup was restored on disk."""
        with self._lock:
            self._hydrate()
        return self

    # --- Edits ----------------------------------------------------------------
    def set_field(self, key: str, period: int, field: str, value: str):
        with self._lock:
            self.agenda.set_field(key, period, field, value)

    def set_default(self, period: int, value: str):
        with self._lock:
            self.defaults.set_default(period, value)

    def set_theme(self, value: str) -> str:
        with self._lock:
            self.theme.set(value)
            return self.theme.value

    def toggle_theme(self) -> str:
        with self._lock:
            return self.theme.toggle()

    def _hydrate(self):
        # from_dict and direct assignment do not publish, so nothing is written back
        self.repository.load_agenda(self.agenda)
        self.repository.load_defaults(self.defaults)
        self.theme.value = self.repository.load_theme()

    # --- Persistence observers ----------------------------------------------
    def _persist_agenda(self, event_name: str, payload: Any):
        logger.debug("%s %s", event_name, payload)
        self.repository.save_agenda(self.agenda)

    def _persist_defaults(self, event_name: str, payload: Any):
        logger.debug("%s %s", event_name, payload)
        self.repository.save_defaults(self.defaults)

    def _persist_theme(self, event_name: str, payload: Any):
        logger.debug("%s %s", event_name, payload)
        self.repository.save_theme(self.theme)


def build_state(data_dir: Optional[Path] = None) -> PlannerState:
    """Production state: JSON files under the configured data directory."""
    return PlannerState(JsonFileStorage(data_dir or DATA_DIR)).load()


__all__ = ['PlannerState', 'build_state']
