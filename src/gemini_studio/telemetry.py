"""Telemetry context and reporter interfaces.

Telemetry is a shared no-op unless ``GEMINI_STUDIO_TELEMETRY=1`` (or
``DEBUG=1``) is set and at least one reporter is supplied.
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import logging
import os
import time
from types import TracebackType
from typing import Any, Protocol, Self, runtime_checkable

log = logging.getLogger(__name__)

_scope_stack_var: ContextVar[tuple[str, ...]] = ContextVar(
    "studio_scope_stack",
    default=(),
)


def _telemetry_enabled() -> bool:
    return os.getenv("GEMINI_STUDIO_TELEMETRY") == "1" or os.getenv("DEBUG") == "1"


@runtime_checkable
class TelemetryReporter(Protocol):
    """Duck-typed protocol for telemetry reporters."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None: ...  # noqa: D102
    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class _NoOpTelemetryContext:
    """Stateless no-op context."""

    def __call__(self, name: str, **metadata: Any) -> Self:  # noqa: ARG002
        return self

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        return None

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        pass

    def gauge(self, name: str, value: float, **metadata: Any) -> None:
        pass


class _EnabledTelemetryContext:
    """Telemetry context that forwards timings and metrics to reporters."""

    __slots__ = ("reporters",)

    def __init__(self, *reporters: TelemetryReporter):
        self.reporters = reporters

    def __call__(
        self, name: str, **metadata: Any
    ) -> AbstractContextManager["_EnabledTelemetryContext"]:
        return self._scope(name, **metadata)

    @contextmanager
    def _scope(self, name: str, **metadata: Any) -> Iterator["_EnabledTelemetryContext"]:
        if not name or not isinstance(name, str):
            raise ValueError("Scope name must be a non-empty string")

        stack = _scope_stack_var.get()
        scope_path = ".".join((*stack, name))
        token = _scope_stack_var.set((*stack, name))
        start = time.perf_counter()
        try:
            yield self
        finally:
            duration = time.perf_counter() - start
            _scope_stack_var.reset(token)
            for reporter in self.reporters:
                try:
                    reporter.record_timing(
                        scope_path, duration, depth=len(stack), **metadata
                    )
                except Exception as e:
                    log.error(
                        "Telemetry reporter '%s' failed: %s",
                        type(reporter).__name__,
                        e,
                        exc_info=True,
                    )

    def _metric(self, name: str, value: Any, **metadata: Any) -> None:
        stack = _scope_stack_var.get()
        scope_path = ".".join((*stack, name))
        for reporter in self.reporters:
            try:
                reporter.record_metric(scope_path, value, **metadata)
            except Exception as e:
                log.error(
                    "Telemetry reporter '%s' failed: %s",
                    type(reporter).__name__,
                    e,
                    exc_info=True,
                )

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        """Record a counter metric."""
        self._metric(name, increment, metric_type="counter", **metadata)

    def gauge(self, name: str, value: float, **metadata: Any) -> None:
        """Record a gauge metric."""
        self._metric(name, value, metric_type="gauge", **metadata)


_NO_OP_SINGLETON = _NoOpTelemetryContext()

type TelemetryContextProtocol = _EnabledTelemetryContext | _NoOpTelemetryContext


def TelemetryContext(*reporters: TelemetryReporter) -> TelemetryContextProtocol:  # noqa: N802
    """Return a telemetry context.

    Returns the shared no-op instance unless telemetry is enabled and
    reporters are given.
    """
    if _telemetry_enabled() and reporters:
        return _EnabledTelemetryContext(*reporters)
    return _NO_OP_SINGLETON
