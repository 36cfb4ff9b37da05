from pumastats.core import PumaStatsConfig, start
from pumastats.Sampling import CycleError, CycleOk, SamplingLoop
from pumastats.StatCollector import StatCollector
from pumastats.Stats import StatsView
from pumastats.StatsLogger import StatsLogger
from pumastats.StatSource import ClusteredSource, SingleSource, source_for

__all__ = [
    "ClusteredSource",
    "CycleError",
    "CycleOk",
    "PumaStatsConfig",
    "SamplingLoop",
    "SingleSource",
    "StatCollector",
    "StatsLogger",
    "StatsView",
    "source_for",
    "start",
]
