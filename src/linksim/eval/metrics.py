from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence


@dataclass(frozen=True)
class ReceiptStats:
    count: int
    elapsed_ms: int
    throughput: float
    avg_jitter_ms: float
    jitters_ms: List[int]

    def to_dict(self) -> Dict[str, object]:
        return {
            "count": self.count,
            "elapsed_ms": self.elapsed_ms,
            "throughput": self.throughput,
            "avg_jitter_ms": self.avg_jitter_ms,
            "jitters_ms": list(self.jitters_ms),
        }


def compute_receipt_stats(timestamps: Sequence[int]) -> ReceiptStats | None:
    """Jitter and throughput from receive timestamps in milliseconds.

    Returns ``None`` when fewer than two receipts are logged. Throughput is
    messages per second over the span between the first and last receipt,
    so a span of zero yields ``inf``.
    """
    stamps = [int(t) for t in timestamps]
    if len(stamps) < 2:
        return None
    elapsed_ms = stamps[-1] - stamps[0]
    count = len(stamps)
    throughput = count / (elapsed_ms / 1000.0) if elapsed_ms > 0 else float("inf")
    jitters = [stamps[i] - stamps[i - 1] for i in range(1, count)]
    return ReceiptStats(
        count=count,
        elapsed_ms=elapsed_ms,
        throughput=throughput,
        avg_jitter_ms=sum(jitters) / len(jitters),
        jitters_ms=jitters,
    )


def format_receipt_stats(node_id: int, stats: ReceiptStats | None) -> str:
    if stats is None:
        return f"Node {node_id} - Not enough messages to compute performance stats."
    return (
        f"Node {node_id} - Avg Jitter: {stats.avg_jitter_ms} ms, "
        f"Throughput: {stats.throughput} msg/s"
    )
