import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from multiprocess.dummy import Process, Queue  # type: ignore

from .Stats import StatsView
from .StatSource import RawSnapshot
from .StatsLogger import StatsLogger

ERROR_LABEL: str = "! Puma Stats Logger: logging stats failed"
DEBUG_LINE: str = "statsd: notify statsd"


@dataclass(slots=True, frozen=True)
class CycleOk:
    line: str
    requests_count: int


@dataclass(slots=True, frozen=True)
class CycleError:
    error: Exception
    requests_count: Optional[int] = None  # None when the failure happened before a view was built


class SamplingLoop:
    def __init__(
        self,
        get_stats_snapshot: Callable[[], RawSnapshot],
        log_line: Callable[[str], None],
        log_error: Callable[[BaseException, Any, str], None],
        interval: float = 20.0,
        warmup: float = 5.0,
        log_debug: Optional[Callable[[str], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initializes a new instance of the SamplingLoop class.

        Args:
            get_stats_snapshot (Callable[[], RawSnapshot]): Returns a fresh raw stats snapshot of the host server.
            log_line (Callable[[str], None]): Receives every formatted stats line.
            log_error (Callable[[BaseException, Any, str], None]): Receives the error, its context and a fixed label
                whenever a cycle fails.
            interval (float, optional): Seconds to sleep after every cycle. Defaults to 20.0.
            warmup (float, optional): Seconds to sleep before the first cycle so the host can finish booting.
                Defaults to 5.0.
            log_debug (Callable[[str], None], optional): Receives a debug line at the start of every cycle.
                Defaults to None (no debug output).
            sleep (Callable[[float], None], optional): The sleep function. Defaults to time.sleep.

        Returns:
            None

        Raises:
            ValueError: If `interval` or `warmup` is negative or not finite.
        """
        for name, seconds in (("interval", interval), ("warmup", warmup)):
            if not math.isfinite(seconds) or seconds < 0:
                raise ValueError(f"{name} must be a finite number of seconds >= 0, got {seconds!r}")
        self.get_stats_snapshot = get_stats_snapshot
        self.log_error = log_error
        self.log_debug = log_debug
        self.stats_logger: StatsLogger = StatsLogger(log_line)
        self.interval: float = interval
        self.warmup: float = warmup
        self.sleep = sleep
        self.cycles: int = 0
        self.previous_requests_count: int = 0
        self.stop_queue = Queue()

    def run_cycle(self, previous_requests_count: int) -> CycleOk | CycleError:
        """
        Samples the host once and logs the resulting stats line.

        Args:
            previous_requests_count (int): The requests count of the previous cycle, used for the requests delta.

        Returns:
            CycleOk | CycleError: CycleOk with the logged line, or CycleError with the exception raised by the
            snapshot provider, the stats normalization or the sink. Both carry this cycle's requests count
            whenever the view could be built.
        """
        requests_count: Optional[int] = None
        try:
            view = StatsView(self.get_stats_snapshot(), previous_requests_count)
            requests_count = view.requests_count
            line = self.stats_logger.log(view)
        except Exception as e:
            return CycleError(e, requests_count)
        return CycleOk(line, requests_count)

    def run(self, max_cycles: Optional[int] = None) -> None:
        """
        Runs sampling cycles forever, or until `max_cycles` cycles ran or a stop was requested.

        A failing cycle is reported through `log_error` and never ends the loop. The interval sleep happens
        after every cycle, successful or not.

        Args:
            max_cycles (int, optional): Number of cycles after which the loop returns. Defaults to None (no limit).
        """
        self.sleep(self.warmup)
        while max_cycles is None or self.cycles < max_cycles:
            if self.stop_requested():
                break
            if self.log_debug is not None:
                self.log_debug(DEBUG_LINE)

            outcome = self.run_cycle(self.previous_requests_count)
            if outcome.requests_count is not None:
                self.previous_requests_count = outcome.requests_count
            if isinstance(outcome, CycleError):
                self.log_error(outcome.error, None, ERROR_LABEL)

            self.cycles += 1
            self.sleep(self.interval)

    def stop_requested(self) -> bool:
        while not self.stop_queue.empty():
            if self.stop_queue.get() == "STOP":
                return True
        return False

    def start(self) -> None:
        """
        Starts the sampling loop in a daemon background worker inside the current process.
        """
        self.sampling_process = Process(target=self.run, args=())
        self.sampling_process.daemon = True
        self.sampling_process.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Asks the background worker to stop and waits for it.

        The stop is picked up between cycles, so this can block for up to one interval.

        Args:
            timeout (float, optional): Maximum seconds to wait for the worker. Defaults to None (wait forever).
        """
        self.stop_queue.put("STOP")
        if hasattr(self, "sampling_process"):
            self.sampling_process.join(timeout)
            if not self.sampling_process.is_alive():
                delattr(self, "sampling_process")

    def is_running(self) -> bool:
        return hasattr(self, "sampling_process") and self.sampling_process.is_alive()
