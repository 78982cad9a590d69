"""Metrics service for tracking recommendation traffic.

Counts recommendation calls per strategy and tracks their latency.
"""

import threading
from typing import Dict

from storefront.recommender.engine import (
    STRATEGY_ORDERS,
    STRATEGY_POPULAR,
    STRATEGY_SEARCH,
)


class MetricsService:
    """Thread-safe counters and latency tracking for recommendation calls.

    One instance lives on each application (``app.state.metrics``).
    """

    def __init__(self):
        """Initialize metrics counters."""
        self._lock = threading.Lock()
        self._reset_counters()

    def _reset_counters(self) -> None:
        self._recommendation_count = 0
        self._strategy_counts = {
            STRATEGY_ORDERS: 0,
            STRATEGY_SEARCH: 0,
            STRATEGY_POPULAR: 0,
        }
        self._total_latency_ms = 0.0
        self._min_latency_ms = float('inf')
        self._max_latency_ms = 0.0

    def record_recommendation(self, strategy: str, latency_ms: float) -> None:
        """Record a recommendation call with its strategy and latency.

        Args:
            strategy: Tier that answered the call
            latency_ms: Latency in milliseconds
        """
        with self._lock:
            self._recommendation_count += 1
            self._strategy_counts[strategy] = self._strategy_counts.get(strategy, 0) + 1
            self._total_latency_ms += latency_ms

            if latency_ms < self._min_latency_ms:
                self._min_latency_ms = latency_ms

            if latency_ms > self._max_latency_ms:
                self._max_latency_ms = latency_ms

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with metrics including:
            - recommendation_count: Total number of recommendation calls
            - strategy_counts: Calls answered by each strategy
            - average_latency_ms: Average latency in milliseconds
            - min_latency_ms: Minimum latency observed
            - max_latency_ms: Maximum latency observed
        """
        with self._lock:
            avg_latency = (
                self._total_latency_ms / self._recommendation_count
                if self._recommendation_count > 0
                else 0.0
            )

            return {
                "recommendation_count": self._recommendation_count,
                "strategy_counts": dict(self._strategy_counts),
                "average_latency_ms": round(avg_latency, 2),
                "min_latency_ms": round(self._min_latency_ms, 2) if self._min_latency_ms != float('inf') else 0.0,
                "max_latency_ms": round(self._max_latency_ms, 2),
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._reset_counters()
