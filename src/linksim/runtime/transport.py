from __future__ import annotations

import select
import socket
import threading
from typing import Optional, Tuple

from linksim.core.types import Endpoint


class TcpLineListener:
    """Listening socket that hands out one line per inbound connection."""

    def __init__(self, bind_address: str, bind_port: int, backlog: int = 50) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._sock.bind((bind_address, bind_port))
            self._sock.listen(backlog)
        except (OSError, OverflowError):
            self._sock.close()
            raise
        self._lock = threading.Lock()
        self._active: Optional[socket.socket] = None
        self._closed = False

    def accept_line(self, timeout_s: float) -> Optional[Tuple[bytes, tuple[str, int]]]:
        if self._closed:
            raise OSError("listener closed")
        try:
            readable, _, _ = select.select([self._sock], [], [], max(0.0, timeout_s))
        except ValueError as exc:
            # Closed from another thread between the check and select().
            raise OSError("listener closed") from exc
        if not readable:
            return None
        conn, addr = self._sock.accept()
        with self._lock:
            if self._closed:
                conn.close()
                raise OSError("listener closed")
            self._active = conn
        try:
            with conn, conn.makefile("rb") as reader:
                line = reader.readline()
        finally:
            with self._lock:
                self._active = None
        return line, (str(addr[0]), int(addr[1]))

    def close(self) -> None:
        with self._lock:
            self._closed = True
            if self._active is not None:
                try:
                    self._active.shutdown(socket.SHUT_RDWR)
                except OSError:
                    pass
        self._sock.close()


class TcpLineTransport:
    def listen(self, endpoint: Endpoint) -> TcpLineListener:
        return TcpLineListener(endpoint.host, endpoint.port)

    def send_line(self, endpoint: Endpoint, payload: bytes) -> None:
        with socket.create_connection(endpoint.address()) as sock:
            sock.sendall(payload)
