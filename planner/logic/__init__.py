"""Core planner logic layer.

Subpackages:
- dates: date keys, "today" in the reference timezone, display labels
- agenda: planner state (stores + persistence wiring) and the per-day view
"""
__all__ = ["dates", "agenda"]
