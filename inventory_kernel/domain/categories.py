"""
CategorySet -- Deduplicated, first-seen-ordered category index.

Fed by item additions only. There is no removal operation:
a category stays listed after its last item is deleted.
"""

from typing import Iterator


class CategorySet:
    """Ordered set of every category ever added."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def ensure(self, name: str) -> bool:
        """Add ``name`` if absent. Returns True when it was new."""
        if name in self._names:
            return False
        self._names.append(name)
        return True

    def all(self) -> tuple[str, ...]:
        return tuple(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._names))
