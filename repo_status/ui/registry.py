"""
Presentation-side store of the last known status per consumer.
"""

from typing import Dict, Iterable, List, Mapping, Optional

from loguru import logger

from ..git_ops.records import FileStatus


class StatusRegistry:
    """Tracks the status each consumer (an open file, a tree row...) displays.

    The engine never touches this; callers compute a full mapping first and
    then apply it in one step, so no consumer sees a half-refreshed state.
    """

    def __init__(self, consumers: Iterable[str] = ()):
        self._statuses: Dict[str, Optional[FileStatus]] = {name: None for name in consumers}

    def register(self, name: str) -> None:
        self._statuses.setdefault(name, None)

    def unregister(self, name: str) -> None:
        self._statuses.pop(name, None)

    def get(self, name: str) -> Optional[FileStatus]:
        return self._statuses.get(name)

    @property
    def consumers(self) -> List[str]:
        return list(self._statuses)

    def apply(self, mapping: Mapping[str, FileStatus], refreshed: Optional[Iterable[str]] = None) -> List[str]:
        """Apply a resolved mapping to the refreshed consumers (default: all).

        Consumers missing from the mapping drop to "no information". Returns
        the consumers whose status changed.
        """
        targets = list(refreshed) if refreshed is not None else self.consumers
        changed = []
        for name in targets:
            if name not in self._statuses:
                continue
            status = mapping.get(name)
            if self._statuses[name] != status:
                self._statuses[name] = status
                changed.append(name)
        logger.debug(f"Applied status mapping to {len(targets)} consumers, {len(changed)} changed")
        return changed
