from typing import Final

PERIODS: Final[tuple[int, ...]] = (0, 1, 2, 3, 4, 5, 6)
PERIOD_FIELDS: Final[tuple[str, ...]] = ("subject", "notes", "homework")

DATE_KEY_FORMAT: Final[str] = "%Y-%m-%d"
SECONDS_PER_DAY: Final[int] = 24 * 60 * 60

# Storage namespaces (one JSON document each)
AGENDA_NAMESPACE: Final[str] = "student_agenda_data"
DEFAULTS_NAMESPACE: Final[str] = "student_agenda_defaults"
THEME_NAMESPACE: Final[str] = "student_agenda_theme"
NAMESPACES: Final[tuple[str, ...]] = (AGENDA_NAMESPACE, DEFAULTS_NAMESPACE, THEME_NAMESPACE)

THEME_LIGHT: Final[str] = "light"
THEME_DARK: Final[str] = "dark"
THEMES: Final[tuple[str, ...]] = (THEME_LIGHT, THEME_DARK)

LABEL_TODAY: Final[str] = "Today"
LABEL_TOMORROW: Final[str] = "Tomorrow"
LABEL_YESTERDAY: Final[str] = "Yesterday"
RELATIVE_LABELS: Final[dict[int, str]] = {0: LABEL_TODAY, 1: LABEL_TOMORROW, -1: LABEL_YESTERDAY}

SUBJECT_PLACEHOLDER: Final[str] = "Add Subject..."
BACKUPS_TO_KEEP: Final[int] = 10
