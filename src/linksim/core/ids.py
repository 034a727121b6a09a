from __future__ import annotations

from typing import List

from linksim.core.errors import InvalidRequestError


class NodeIdRange:
    """Contiguous node id range ``[1, size]`` and its matrix indexing."""

    def __init__(self, size: int) -> None:
        if int(size) < 1:
            raise ValueError(f"node count must be >= 1, got {size}")
        self._size = int(size)

    @property
    def size(self) -> int:
        return self._size

    def contains(self, node_id: object) -> bool:
        return isinstance(node_id, int) and not isinstance(node_id, bool) and 1 <= node_id <= self._size

    def validate(self, node_id: object) -> int:
        if not self.contains(node_id):
            raise InvalidRequestError(f"invalid node id {node_id!r}: must be between 1 and {self._size}")
        return int(node_id)  # type: ignore[arg-type]

    def index(self, node_id: int) -> int:
        return self.validate(node_id) - 1

    def ids(self) -> List[int]:
        return list(range(1, self._size + 1))

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"NodeIdRange(1..{self._size})"
