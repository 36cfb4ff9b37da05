import math
import os
from typing import Any, Callable, Optional

from pumastats.Sampling import SamplingLoop
from pumastats.StatCollector import StatCollector
from pumastats.StatSource import RawSnapshot
from pumastats.utils import print_debug, print_error, print_line

INTERVAL_ENV_VAR: str = "PUMA_STATS_INTERVAL_SECONDS"
DEFAULT_INTERVAL_SECONDS: float = 20.0


def read_interval(environ=os.environ) -> float:
    """
    Reads the sampling interval from the environment.

    Args:
        environ (Mapping, optional): The environment to read from. Defaults to os.environ.

    Returns:
        float: The value of PUMA_STATS_INTERVAL_SECONDS, or 20.0 if it is unset, not a number, negative or infinite.
    """
    value = environ.get(INTERVAL_ENV_VAR)
    if value is None:
        return DEFAULT_INTERVAL_SECONDS
    try:
        interval = float(value)
    except ValueError:
        interval = math.nan
    if not math.isfinite(interval) or interval < 0:
        print(f"Invalid {INTERVAL_ENV_VAR} value {value!r}. Using {DEFAULT_INTERVAL_SECONDS}s instead.")
        return DEFAULT_INTERVAL_SECONDS
    return interval


class PumaStatsConfig:
    ACTIVE: bool = True
    VERBOSE: bool = False
    INTERVAL_SECONDS: float = read_interval()
    WARMUP_SECONDS: float = 5.0


def start(
    get_stats_snapshot: Optional[Callable[[], RawSnapshot]] = None,
    log_line: Callable[[str], None] = print_line,
    log_error: Callable[[BaseException, Any, str], None] = print_error,
    interval: Optional[float] = None,
    max_threads: Optional[int] = None,
) -> Optional[SamplingLoop]:
    """
    Starts logging the server stats in the background.

    Args:
        get_stats_snapshot (Callable[[], RawSnapshot], optional): Returns the raw stats of the server.
            Defaults to sampling the current process tree with psutil.
        log_line (Callable[[str], None], optional): Receives every stats line. Defaults to printing it.
        log_error (Callable[[BaseException, Any, str], None], optional): Receives the failed cycles.
            Defaults to printing them with their traceback.
        interval (float, optional): Seconds between two samples. Defaults to PumaStatsConfig.INTERVAL_SECONDS.
        max_threads (int, optional): Thread pool size of each server process, used by the default psutil provider
            to report `max_threads` and `pool_capacity`. Without it the default provider only reports thread counts,
            so `max_threads` is 0 and `percent_busy_threads` is nan. Ignored when `get_stats_snapshot` is given.

    Returns:
        SamplingLoop | None: The running loop, or None if PumaStatsConfig.ACTIVE is set to False.

    Example:
        loop = start(server.stats, logger.info, report_error)
        ...
        loop.stop()
    """
    if not PumaStatsConfig.ACTIVE:
        return None

    if get_stats_snapshot is None:
        get_stats_snapshot = StatCollector(os.getpid(), max_threads=max_threads).collect
    if interval is None:
        interval = PumaStatsConfig.INTERVAL_SECONDS
    log_debug = print_debug if PumaStatsConfig.VERBOSE else None

    sampling_loop = SamplingLoop(
        get_stats_snapshot,
        log_line,
        log_error,
        interval=interval,
        warmup=PumaStatsConfig.WARMUP_SECONDS,
        log_debug=log_debug,
    )
    if log_debug is not None:
        log_debug(f"Puma Stats Logger: enabled (interval: {interval}s)")
    sampling_loop.start()
    return sampling_loop
