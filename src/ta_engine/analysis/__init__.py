from .criteria import (
    AnalysisCriterion,
    AverageProfitCriterion,
    BuyAndHoldCriterion,
    MaximumDrawdownCriterion,
    NumberOfTradesCriterion,
    RewardRiskRatioCriterion,
    TotalProfitCriterion,
    equity_curve,
    trade_return,
)
from .summary import BacktestSummary, summarize

__all__ = [
    "AnalysisCriterion",
    "TotalProfitCriterion",
    "NumberOfTradesCriterion",
    "AverageProfitCriterion",
    "MaximumDrawdownCriterion",
    "RewardRiskRatioCriterion",
    "BuyAndHoldCriterion",
    "BacktestSummary",
    "summarize",
    "equity_curve",
    "trade_return",
]
