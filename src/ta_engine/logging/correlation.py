"""Run correlation IDs and backtest context attached to every log record."""

from __future__ import annotations

import contextvars
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

# Context variable to store the current run ID
run_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default="")

# Context variable to store run-specific fields (strategy, slice, ...)
run_fields_var: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "run_fields", default={}
)


def get_run_id() -> str:
    """Get the current run ID from the context."""
    return run_id_var.get("")


def set_run_id(run_id: str) -> None:
    """Set the run ID in the current context."""
    run_id_var.set(run_id)


def generate_run_id() -> str:
    """Generate a new run ID."""
    return str(uuid.uuid4())


def get_run_fields() -> dict[str, Any]:
    """Get the current run fields from the context."""
    return run_fields_var.get({})


def set_run_fields(fields: dict[str, Any]) -> None:
    """Set the run fields in the current context."""
    run_fields_var.set(fields)


@contextmanager
def run_context(run_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Bind a run ID and run fields for the duration of the block.

    Nested blocks inherit the outer run ID unless a new one is given, and
    merge their fields over the outer ones. Both are restored on exit.

    Yields:
        The active run ID.
    """
    active_id = run_id or get_run_id() or generate_run_id()
    token_id = run_id_var.set(active_id)
    token_fields = run_fields_var.set({**get_run_fields(), **fields})

    try:
        yield active_id
    finally:
        run_id_var.reset(token_id)
        run_fields_var.reset(token_fields)


def get_log_context() -> dict[str, Any]:
    """Get the complete log context including run ID and run fields."""
    context: dict[str, Any] = {}

    run_id = get_run_id()
    if run_id:
        context["run_id"] = run_id

    fields = get_run_fields()
    if fields:
        context.update(fields)

    return context


__all__ = [
    "generate_run_id",
    "get_log_context",
    "get_run_fields",
    "get_run_id",
    "run_context",
    "set_run_fields",
    "set_run_id",
]
