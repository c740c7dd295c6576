import time
import threading
from dataclasses import dataclass, field
from typing import List


@dataclass
class ExecutionMetrics:
    attempts: int = 0
    retry_count: int = 0          # Attempts that failed and were followed by a backoff
    success_count: int = 0
    failure_count: int = 0        # Runs that ended without a usable response
    delays_ms: List[int] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0


class ExecutionTracker:
    """
    Records what happened during extraction calls: attempts, the backoff
    delays actually waited, and the final outcome.
    """
    def __init__(self):
        self.metrics = ExecutionMetrics()
        self._lock = threading.Lock()

    def start(self):
        with self._lock:
            self.metrics = ExecutionMetrics(start_time=time.time())

    def finish(self):
        with self._lock:
            self.metrics.end_time = time.time()

    def log_attempt(self):
        with self._lock:
            self.metrics.attempts += 1

    def log_retry(self, delay_ms: int, reason: str):
        with self._lock:
            self.metrics.retry_count += 1
            self.metrics.delays_ms.append(delay_ms)
            self.metrics.errors.append(f"Retry after {delay_ms}ms: {reason}")

    def log_success(self):
        with self._lock:
            self.metrics.success_count += 1

    def log_failure(self, error: str):
        with self._lock:
            self.metrics.failure_count += 1
            self.metrics.errors.append(f"❌ {error}")

    @property
    def duration(self) -> float:
        if not self.metrics.start_time:
            return 0.0
        end = self.metrics.end_time or time.time()
        return max(0.0, end - self.metrics.start_time)

    def summary(self) -> str:
        m = self.metrics
        status = "✅ SUCCESS" if m.success_count and not m.failure_count else (
            "❌ FAILED" if m.failure_count else "⏳ PENDING"
        )
        return (
            f"{status} | Attempts: {m.attempts}, Retries: {m.retry_count}, "
            f"Waited: {sum(m.delays_ms) / 1000:.0f}s, Duration: {self.duration:.1f}s"
        )
