"""Entity handle registry

Maps the external identifiers of vocabulary entities to the integer handles
used inside alignments, and back.
"""

from typing import Dict, Iterable, List


class EntityIndex:
    """Bidirectional external-id <-> integer-handle registry

    Handles are assigned in registration order starting at 0. Source and
    target entities may share one index as long as their ids differ.
    """

    def __init__(self, external_ids: Iterable[str] = ()):
        self._handles: Dict[str, int] = {}
        self._ids: List[str] = []
        for external_id in external_ids:
            self.register(external_id)

    def register(self, external_id: str) -> int:
        """Return the handle for ``external_id``, assigning one if new"""
        handle = self._handles.get(external_id)
        if handle is None:
            handle = len(self._ids)
            self._handles[external_id] = handle
            self._ids.append(external_id)
        return handle

    def handle(self, external_id: str) -> int:
        try:
            return self._handles[external_id]
        except KeyError:
            raise KeyError(f"Unknown entity '{external_id}'") from None

    def uri(self, handle: int) -> str:
        if not 0 <= handle < len(self._ids):
            raise KeyError(f"Unknown entity handle {handle}")
        return self._ids[handle]

    def __contains__(self, external_id) -> bool:
        return external_id in self._handles

    def __len__(self) -> int:
        return len(self._ids)
