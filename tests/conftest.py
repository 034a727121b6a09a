from __future__ import annotations

import random
import socket

import pytest


def _ports_free(host: str, ports: range) -> bool:
    for port in ports:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((host, port))
            except OSError:
                return False
    return True


def find_base_port(count: int, host: str = "127.0.0.1") -> int:
    rng = random.Random()
    for _ in range(200):
        base = rng.randrange(20000, 60000 - count)
        if _ports_free(host, range(base + 1, base + count + 1)):
            return base
    raise RuntimeError(f"no block of {count} free ports found")


def closed_port(host: str = "127.0.0.1") -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return int(sock.getsockname()[1])


@pytest.fixture
def base_port_factory():
    return find_base_port
