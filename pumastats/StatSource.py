from typing import Any, List, Mapping

RawSnapshot = Mapping[str, Any]


class SingleSource:
    def __init__(self, stats: RawSnapshot):
        """
        Initializes a new instance of the SingleSource class.

        Args:
            stats (RawSnapshot): A flat stats mapping with the keys `running`, `backlog`, `pool_capacity`,
                `max_threads` and `requests_count`. Missing keys read as 0.

        Returns:
            None
        """
        self.stats: RawSnapshot = stats

    def running(self) -> int:
        return self.stats.get("running", 0)

    def backlog(self) -> int:
        return self.stats.get("backlog", 0)

    def pool_capacity(self) -> int:
        return self.stats.get("pool_capacity", 0)

    def max_threads(self) -> int:
        return self.stats.get("max_threads", 0)

    def requests_count(self) -> int:
        return self.stats.get("requests_count", 0)

    def busy_threads(self) -> int:
        return self.max_threads() - self.pool_capacity()

    def running_workers(self) -> int:
        return 1 if self.running() > 0 else 0

    def busy_workers(self) -> int:
        return 1 if self.busy_threads() > 0 else 0


class ClusteredSource:
    def __init__(self, stats: RawSnapshot):
        """
        Initializes a new instance of the ClusteredSource class.

        Every record of `worker_status` is wrapped in a SingleSource built from its `last_status` mapping.

        Args:
            stats (RawSnapshot): A clustered stats mapping holding a `worker_status` sequence.

        Raises:
            KeyError: If a worker record has no `last_status`.
            TypeError: If `worker_status` is not iterable.
        """
        self.stats: RawSnapshot = stats
        self.worker_sources: List[SingleSource] = [
            SingleSource(worker["last_status"]) for worker in stats.get("worker_status", [])
        ]

    def running(self) -> int:
        return sum(source.running() for source in self.worker_sources)

    def backlog(self) -> int:
        return sum(source.backlog() for source in self.worker_sources)

    def pool_capacity(self) -> int:
        return sum(source.pool_capacity() for source in self.worker_sources)

    def max_threads(self) -> int:
        return sum(source.max_threads() for source in self.worker_sources)

    def requests_count(self) -> int:
        return sum(source.requests_count() for source in self.worker_sources)

    def running_workers(self) -> int:
        return sum(1 for source in self.worker_sources if source.running() > 0)

    def busy_workers(self) -> int:
        return sum(1 for source in self.worker_sources if source.busy_threads() > 0)


def is_clustered(stats: RawSnapshot) -> bool:
    return "workers" in stats


def source_for(stats: RawSnapshot) -> SingleSource | ClusteredSource:
    """
    Selects the metric source matching the shape of the given snapshot.

    Args:
        stats (RawSnapshot): The raw stats snapshot.

    Returns:
        SingleSource | ClusteredSource: A ClusteredSource if the snapshot has a `workers` key, a SingleSource otherwise.
    """
    if is_clustered(stats):
        return ClusteredSource(stats)
    return SingleSource(stats)
