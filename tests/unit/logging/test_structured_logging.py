import json
import logging
import sys
from decimal import Decimal

from ta_engine.core import Num
from ta_engine.logging import StructuredJSONFormatter, get_log_context, run_context
from ta_engine.logging.correlation import get_run_id
from ta_engine.utilities import get_logger, log_operation, log_trade_event


def _record(message: str = "msg", **extra) -> logging.LogRecord:
    record = logging.LogRecord("ta_engine.x", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRunContext:
    def test_binds_and_restores(self) -> None:
        assert get_log_context() == {}
        with run_context(run_id="outer", strategy="s1") as run_id:
            assert run_id == "outer"
            with run_context(slice=2):
                assert get_log_context() == {"run_id": "outer", "strategy": "s1", "slice": 2}
            assert get_log_context() == {"run_id": "outer", "strategy": "s1"}
        assert get_run_id() == ""
        assert get_log_context() == {}

    def test_generates_run_id(self) -> None:
        with run_context() as run_id:
            assert run_id
            assert get_run_id() == run_id


class TestJSONFormatter:
    def test_serialises_num_and_decimal(self) -> None:
        formatter = StructuredJSONFormatter()
        payload = json.loads(formatter.format(_record(price=Num("1.25"), size=Decimal("0.1"))))
        assert payload["price"] == "1.25"
        assert payload["size"] == "0.1"
        assert payload["logger"] == "ta_engine.x"
        assert payload["timestamp"].endswith("+00:00")

    def test_includes_run_context(self) -> None:
        formatter = StructuredJSONFormatter()
        with run_context(run_id="abc", strategy="cci"):
            payload = json.loads(formatter.format(_record()))
        assert payload["run_id"] == "abc"
        assert payload["strategy"] == "cci"

    def test_includes_exception(self) -> None:
        formatter = StructuredJSONFormatter()
        try:
            raise ValueError("bad")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        payload = json.loads(formatter.format(record))
        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "bad"

    def test_unserialisable_extra_falls_back(self) -> None:
        formatter = StructuredJSONFormatter()
        payload = json.loads(formatter.format(_record(blob=object())))
        assert payload["message"].startswith("JSON serialization failed")
        assert payload["original_message"] == "msg"


def test_structured_logger_passes_extra(caplog) -> None:
    caplog.set_level(logging.INFO, logger="ta_engine.unit")
    get_logger("ta_engine.unit", component="tests").info("event", index=4)
    record = caplog.records[-1]
    assert record.index == 4
    assert record.component == "tests"


def test_log_operation_logs_start_and_completion(caplog) -> None:
    caplog.set_level(logging.INFO, logger="ta_engine.operation")
    with log_operation("warmup", bars=10):
        pass
    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["Started warmup", "Completed warmup"]
    assert caplog.records[-1].bars == 10
    assert float(caplog.records[-1].duration_ms) >= 0


def test_log_trade_event_is_debug(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="ta_engine.trading")
    log_trade_event("Trade opened", index=1)
    record = caplog.records[-1]
    assert record.levelno == logging.DEBUG
    assert record.operation == "trade_event"
