"""Receive-side performance statistics."""

from linksim.eval.metrics import ReceiptStats, compute_receipt_stats, format_receipt_stats

__all__ = ["ReceiptStats", "compute_receipt_stats", "format_receipt_stats"]
