from __future__ import annotations

from dataclasses import dataclass
from typing import List

NodeId = int
Path = List[NodeId]


@dataclass(frozen=True)
class Endpoint:
    host: str
    port: int

    def address(self) -> tuple[str, int]:
        return (self.host, int(self.port))

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"
