"""Composable enter/exit rules."""

from .base import Strategy
from .catalog import (
    available_strategies,
    build_cci_correction_strategy,
    build_rsi2_strategy,
    build_sma_crossover_strategy,
    get_strategy,
)
from .combinators import (
    AlwaysOperateStrategy,
    AndStrategy,
    CombinedBuyAndSellStrategy,
    OppositeStrategy,
    OrStrategy,
)
from .indicator_rules import (
    IndicatorCrossedIndicatorStrategy,
    IndicatorOverIndicatorStrategy,
    ResistanceStrategy,
    SupportStrategy,
)

__all__ = [
    "Strategy",
    "AndStrategy",
    "OrStrategy",
    "OppositeStrategy",
    "CombinedBuyAndSellStrategy",
    "AlwaysOperateStrategy",
    "IndicatorOverIndicatorStrategy",
    "IndicatorCrossedIndicatorStrategy",
    "SupportStrategy",
    "ResistanceStrategy",
    "available_strategies",
    "build_rsi2_strategy",
    "build_cci_correction_strategy",
    "build_sma_crossover_strategy",
    "get_strategy",
]
