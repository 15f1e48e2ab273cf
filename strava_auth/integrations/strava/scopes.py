from __future__ import annotations

from enum import StrEnum

SCOPE_SEPARATOR = ","


class Scope(StrEnum):
    """Permission identifiers understood by the Strava OAuth endpoint."""

    READ = "read"
    READ_ALL = "read_all"
    PROFILE_READ_ALL = "profile:read_all"
    PROFILE_WRITE = "profile:write"
    ACTIVITY_READ = "activity:read"
    ACTIVITY_READ_ALL = "activity:read_all"
    ACTIVITY_WRITE = "activity:write"

    @classmethod
    def parse_list(cls, value: str) -> list[Scope]:
        """Parse a CSV scope string, rejecting unknown identifiers.

        Blank items are ignored, so "read, activity:read" and "read,activity:read"
        are equivalent.

        Raises:
            ValueError: If an item is not a known scope
        """
        scopes: list[Scope] = []
        for item in value.split(SCOPE_SEPARATOR):
            item = item.strip()
            if not item:
                continue
            scopes.append(cls(item))
        return scopes
