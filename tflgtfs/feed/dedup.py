from typing import Iterable, Optional, Set


class SeenSet:
    """Identifiers already emitted within one table scope."""

    def __init__(self, initial: Optional[Iterable[str]] = None):
        self._ids: Set[str] = set(initial or ())

    def seen(self, identifier: str) -> bool:
        return identifier in self._ids

    def mark_seen(self, identifier: str) -> None:
        self._ids.add(identifier)

    def __contains__(self, identifier: str) -> bool:
        return self.seen(identifier)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self):
        return f"<SeenSet(size={len(self._ids)})>"
