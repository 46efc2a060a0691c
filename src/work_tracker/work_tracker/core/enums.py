from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    USER = "user"
    ADMIN = "admin"


class ProgressStatus(str, Enum):
    """Monthly progress label shown on the admin overview."""

    COMPLETE = "complete"
    ON_TRACK = "on_track"
    BEHIND = "behind"
