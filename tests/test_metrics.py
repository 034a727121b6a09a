from __future__ import annotations

import math

import pytest

from linksim.eval.metrics import compute_receipt_stats, format_receipt_stats


def test_jitter_and_throughput_from_timestamps() -> None:
    stats = compute_receipt_stats([100, 150, 225])
    assert stats is not None
    assert stats.count == 3
    assert stats.elapsed_ms == 125
    assert stats.jitters_ms == [50, 75]
    assert stats.avg_jitter_ms == pytest.approx(62.5)
    assert stats.throughput == pytest.approx(24.0)


@pytest.mark.parametrize("timestamps", [[], [100]])
def test_insufficient_data(timestamps: list[int]) -> None:
    assert compute_receipt_stats(timestamps) is None


def test_same_millisecond_receipts_give_unbounded_throughput() -> None:
    stats = compute_receipt_stats([500, 500])
    assert stats is not None
    assert math.isinf(stats.throughput)
    assert stats.avg_jitter_ms == 0


def test_stats_are_pure() -> None:
    log = [10, 20, 40]
    assert compute_receipt_stats(log) == compute_receipt_stats(log)
    assert log == [10, 20, 40]


def test_format_receipt_stats() -> None:
    assert format_receipt_stats(3, None) == "Node 3 - Not enough messages to compute performance stats."
    line = format_receipt_stats(3, compute_receipt_stats([100, 150, 225]))
    assert line == "Node 3 - Avg Jitter: 62.5 ms, Throughput: 24.0 msg/s"
