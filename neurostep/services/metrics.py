# neurostep/services/metrics.py
from typing import Dict


class MetricsRecorder:
    """Response-time samples for one quiz attempt, keyed by question id."""

    def __init__(self):
        self.response_times: Dict[str, int] = {}

    def record_response(self, question_id: str, elapsed_ms: int) -> None:
        # A repeated sample for the same question replaces the earlier one
        self.response_times[question_id] = elapsed_ms

    def summarize(self) -> float:
        """Mean response time in milliseconds, or 0 when nothing was recorded."""
        if not self.response_times:
            return 0
        return sum(self.response_times.values()) / len(self.response_times)

    def reset(self) -> None:
        self.response_times = {}
