"""Memoizing, index-addressed indicators."""

from .base import CachedIndicator, Indicator, RecursiveCachedIndicator
from .helpers import (
    AverageGainIndicator,
    AverageLossIndicator,
    CrossIndicator,
    HighestValueIndicator,
    LowestValueIndicator,
    MeanDeviationIndicator,
)
from .oscillators import CCIIndicator, RSIIndicator
from .simple import (
    ClosePriceIndicator,
    ConstantIndicator,
    HighPriceIndicator,
    LowPriceIndicator,
    OpenPriceIndicator,
    TypicalPriceIndicator,
    VolumeIndicator,
)
from .trackers import DoubleEMAIndicator, EMAIndicator, SMAIndicator, TripleEMAIndicator

__all__ = [
    "Indicator",
    "CachedIndicator",
    "RecursiveCachedIndicator",
    "ClosePriceIndicator",
    "OpenPriceIndicator",
    "HighPriceIndicator",
    "LowPriceIndicator",
    "VolumeIndicator",
    "TypicalPriceIndicator",
    "ConstantIndicator",
    "SMAIndicator",
    "EMAIndicator",
    "DoubleEMAIndicator",
    "TripleEMAIndicator",
    "AverageGainIndicator",
    "AverageLossIndicator",
    "MeanDeviationIndicator",
    "HighestValueIndicator",
    "LowestValueIndicator",
    "CrossIndicator",
    "RSIIndicator",
    "CCIIndicator",
]
