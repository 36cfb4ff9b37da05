from typing import Callable, Tuple

from .Stats import StatsView
from .utils import round_half_up

LOG_PREFIX: str = "Puma Stats: "
METRIC_PREFIX: str = "puma."
LOGGED_METRICS: Tuple[str, ...] = (
    "workers",
    "booted_workers",
    "running_workers",
    "busy_workers",
    "idle_workers",
    "running_threads",
    "busy_threads",
    "idle_threads",
    "percent_busy_threads",
    "backlog",
    "max_threads",
    "requests_count",
)


class StatsLogger:
    def __init__(self, log_line: Callable[[str], None]):
        """
        Initializes a new instance of the StatsLogger class.

        Args:
            log_line (Callable[[str], None]): The sink every formatted stats line is handed to.

        Returns:
            None
        """
        self.log_line: Callable[[str], None] = log_line

    def log(self, view: StatsView) -> str:
        """
        Formats the view and hands the line to the sink.

        Args:
            view (StatsView): The stats to log.

        Returns:
            str: The line that was logged.
        """
        line = self.format(view)
        self.log_line(line)
        return line

    @staticmethod
    def format(view: StatsView) -> str:
        """
        Builds the single-line stats entry for a view.

        Each metric is written as `puma.<name>=<value>` followed by a space, so the line keeps a trailing space.
        `percent_busy_threads` is rounded half up to 2 decimals. `requests_delta` is not part of the line.

        Args:
            view (StatsView): The stats to format.

        Returns:
            str: The formatted line, e.g. "Puma Stats: puma.workers=1 puma.booted_workers=1 ... puma.requests_count=50 ".
        """
        entry = LOG_PREFIX
        for name in LOGGED_METRICS:
            value = getattr(view, name)
            if name == "percent_busy_threads":
                value = round_half_up(value, 2)
            entry += f"{METRIC_PREFIX}{name}={value} "
        return entry
