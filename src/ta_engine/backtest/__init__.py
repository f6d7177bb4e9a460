from .runner import HistoryRunner, HistoryRunnerFactory, Runner, RunnerFactory, run_strategy

__all__ = ["HistoryRunner", "HistoryRunnerFactory", "Runner", "RunnerFactory", "run_strategy"]
