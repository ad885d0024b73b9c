"""Simple Event Bus / Observer implementation for planner change notifications.

Event names:
  agenda.changed   -> payload {"date": str, "period": int, "field": str, "value": str}
  schedule.changed -> payload {"period": int, "value": str}
  theme.changed    -> payload {"theme": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
AGENDA_CHANGED = "agenda.changed"
SCHEDULE_CHANGED = "schedule.changed"
THEME_CHANGED = "theme.changed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except ValueError:
			pass

	def subscribers(self, event_name: str) -> List[Callable[[str, Any], None]]:
		return list(self._subscribers.get(event_name, []))

	def publish(self, event_name: str, payload: Any = None):
		for cb in self.subscribers(event_name):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = ['EventBus', 'AGENDA_CHANGED', 'SCHEDULE_CHANGED', 'THEME_CHANGED']
