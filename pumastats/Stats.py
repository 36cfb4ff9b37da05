from .StatSource import ClusteredSource, RawSnapshot, SingleSource, is_clustered, source_for
from .utils import ieee_divide


class StatsView:
    """
    Read-only view over one raw stats snapshot.

    The snapshot may come from a single-process server (flat mapping) or from a clustered server
    (`workers` plus a `worker_status` sequence). Every accessor works the same way on both shapes.
    Missing keys read as 0, except `workers` and `booted_workers` which read as 1.
    """

    __slots__ = ("_stats", "_source", "_previous_requests_count")

    def __init__(self, stats: RawSnapshot, previous_requests_count: int = 0):
        self._stats: RawSnapshot = stats
        self._source: SingleSource | ClusteredSource = source_for(stats)
        self._previous_requests_count: int = previous_requests_count

    @property
    def is_clustered(self) -> bool:
        return is_clustered(self._stats)

    @property
    def previous_requests_count(self) -> int:
        return self._previous_requests_count

    @property
    def workers(self) -> int:
        return self._stats.get("workers", 1)

    @property
    def booted_workers(self) -> int:
        return self._stats.get("booted_workers", 1)

    @property
    def old_workers(self) -> int:
        return self._stats.get("old_workers", 0)

    @property
    def running_workers(self) -> int:
        return self._source.running_workers()

    @property
    def busy_workers(self) -> int:
        return self._source.busy_workers()

    @property
    def idle_workers(self) -> int:
        # Not clamped: a snapshot can report more busy workers than booted ones
        return self.booted_workers - self.busy_workers

    @property
    def running_threads(self) -> int:
        return self._source.running()

    @property
    def backlog(self) -> int:
        return self._source.backlog()

    @property
    def pool_capacity(self) -> int:
        return self._source.pool_capacity()

    @property
    def max_threads(self) -> int:
        return self._source.max_threads()

    @property
    def requests_count(self) -> int:
        return self._source.requests_count()

    @property
    def idle_threads(self) -> int:
        return self.pool_capacity

    @property
    def busy_threads(self) -> int:
        return self.max_threads - self.idle_threads

    @property
    def percent_busy_threads(self) -> float:
        """
        Percentage of the thread pool in use.

        Returns:
            float: `(1 - idle_threads / max_threads) * 100`. With no threads at all the result is nan or infinite.
        """
        return (1 - ieee_divide(self.idle_threads, self.max_threads)) * 100

    @property
    def requests_delta(self) -> int:
        """
        Requests served since the previous snapshot. Negative when a worker restarted and reset its counter.
        """
        return self.requests_count - self._previous_requests_count
