from .accumulator import MergeMode, merge
from .debounce import AsyncioDebounceScheduler
from .generation import RequestGeneration
from .interfaces import IDebounceScheduler, IVisibilityTrigger, PageFetcher
from .visibility import ManualVisibilityTrigger, ThresholdVisibilityTrigger

__all__ = [
    "AsyncioDebounceScheduler",
    "IDebounceScheduler",
    "IVisibilityTrigger",
    "ManualVisibilityTrigger",
    "MergeMode",
    "PageFetcher",
    "RequestGeneration",
    "ThresholdVisibilityTrigger",
    "merge",
]
