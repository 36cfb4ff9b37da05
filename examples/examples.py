import os
import random
import time

from pumastats import PumaStatsConfig, StatCollector, start

# PumaStatsConfig.ACTIVE = False  # Deactivates the stats logger
PumaStatsConfig.VERBOSE = True
PumaStatsConfig.WARMUP_SECONDS = 0.5

requests_count = 0


def clustered_stats():
    """
    Simulate the stats of a server with 2 workers of 5 threads each.
    """
    global requests_count
    requests_count += random.randint(0, 50)
    worker_status = []
    for index in range(2):
        pool_capacity = random.randint(0, 5)
        worker_status.append(
            {
                "index": index,
                "last_status": {
                    "running": 5,
                    "backlog": random.randint(0, 3),
                    "pool_capacity": pool_capacity,
                    "max_threads": 5,
                    "requests_count": requests_count // 2,
                },
            }
        )
    return {"workers": 2, "booted_workers": 2, "old_workers": 0, "worker_status": worker_status}


def broken_stats():
    raise RuntimeError("The server is not reachable")


if __name__ == "__main__":
    loop = start(clustered_stats, interval=1)
    time.sleep(4)
    loop.stop()

    # Failing samples are reported and the loop keeps going
    loop = start(broken_stats, interval=1)
    time.sleep(2)
    loop.stop()

    # Sample this process with psutil
    loop = start(StatCollector(os.getpid(), max_threads=5).collect, interval=1)
    time.sleep(2)
    loop.stop()
