"""Application state management for Starlanes."""

import enum


class AppState(enum.Enum):
    """Top-level application states."""

    LOADING = "loading"
    STAR_MAP = "star_map"
    NO_SYSTEMS = "no_systems"
    ERROR = "error"
