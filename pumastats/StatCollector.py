from typing import Any, Dict, List, Optional

import psutil

from .StatSource import RawSnapshot


class StatCollector:
    def __init__(self, pid: int, max_threads: Optional[int] = None):
        """
        Initializes a new instance of the StatCollector class.

        Args:
            pid (int): The process ID of the server to collect stats for. For a clustered server this is the
                master process, and its direct children are its workers.
            max_threads (int, optional): The configured size of each thread pool. When given, every status also
                reports `max_threads` and a `pool_capacity` derived from the running threads. Defaults to None.

        Returns:
            None
        """
        self.pid: int = pid
        self.max_threads: Optional[int] = max_threads

    def collect(self) -> RawSnapshot:
        """
        Takes a raw stats snapshot of the process tree.

        Returns:
            RawSnapshot: A single-process snapshot if the process has no children, a clustered snapshot with one
            `worker_status` record per child otherwise.

        Raises:
            psutil.NoSuchProcess: If the server process itself does not exist.
        """
        process = psutil.Process(self.pid)
        children = process.children(recursive=False)
        if not children:
            return self.get_status(process)

        worker_status: List[Dict[str, Any]] = []
        booted_workers: int = 0
        for index, child in enumerate(children):
            try:
                if child.status() == psutil.STATUS_ZOMBIE:
                    continue
                last_status = self.get_status(child)
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue  # Workers can exit between listing and sampling, so we skip them
            booted_workers += 1
            worker_status.append({"index": index, "pid": child.pid, "last_status": last_status})

        return {
            "workers": len(children),
            "booted_workers": booted_workers,
            "old_workers": 0,
            "worker_status": worker_status,
        }

    def get_status(self, process: psutil.Process) -> Dict[str, int]:
        """
        Reads the flat status of one server process.

        Args:
            process (psutil.Process): The process to read.

        Returns:
            Dict[str, int]: The `running` thread count, plus `max_threads` and `pool_capacity` when a pool size is
            configured. Keys psutil cannot observe (backlog, requests count) are left out.
        """
        running: int = process.num_threads()
        status: Dict[str, int] = {"running": running}
        if self.max_threads is not None:
            status["max_threads"] = self.max_threads
            status["pool_capacity"] = max(self.max_threads - running, 0)
        return status
