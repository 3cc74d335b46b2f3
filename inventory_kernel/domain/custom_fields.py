"""
CustomFieldRegistry -- Store-wide declared custom fields.

Declaring a field records its name with an unset (``None``) default. The
registry is independent of items: items carry their own per-item values and
may hold fields that were never declared here.
"""

from typing import Any


class CustomFieldRegistry:
    """Mapping of declared field name -> default value (always None)."""

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def register(self, name: str) -> bool:
        """Declare ``name``. Returns False (no-op) when already declared."""
        if name in self._fields:
            return False
        self._fields[name] = None
        return True

    def names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)
