"""
Resolution observers.

Resolution and loading convert every failure into "no match" or a
fallback component. Observers are the hook that keeps those outcomes
visible: the resolver and loader call them at each decision point.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .exceptions import ErrorSeverity

if TYPE_CHECKING:
    from .exceptions import NavigationError
    from .loader import ComponentKind
    from .models import OperationDescriptor, ResolutionResult

logger = logging.getLogger(__name__)


class ResolutionObserver:
    """Base observer. Every hook is a no-op; override what you need."""

    def on_cache_hit(
        self, scope: str, path: str, result: Optional["ResolutionResult"]
    ) -> None:
        pass

    def on_resolved(self, scope: str, path: str, result: "ResolutionResult") -> None:
        pass

    def on_not_found(self, scope: str, path: str) -> None:
        pass

    def on_ambiguous_match(
        self, scope: str, path: str, matches: List["OperationDescriptor"]
    ) -> None:
        pass

    def on_error(self, error: "NavigationError") -> None:
        pass

    def on_component_fallback(self, component_id: str, kind: "ComponentKind") -> None:
        pass

    def on_component_not_found(self, component_id: str) -> None:
        pass


class LoggingResolutionObserver(ResolutionObserver):
    """Observer that writes each event to the log with structured fields."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger

    def on_cache_hit(self, scope, path, result) -> None:
        self._log.debug(
            f"Resolution cache hit for {scope}:{path}",
            extra={"extra_data": {"scope": scope, "path": path, "found": result is not None}},
        )

    def on_resolved(self, scope, path, result) -> None:
        self._log.debug(
            f"Resolved {path} -> {result.component_id} ({result.scenario.value})",
            extra={
                "extra_data": {
                    "scope": scope,
                    "path": path,
                    "operation_id": result.operation_id,
                    "component_id": result.component_id,
                    "alias_hit": result.alias_hit,
                }
            },
        )

    def on_not_found(self, scope, path) -> None:
        self._log.info(
            f"No operation found for {path}",
            extra={"extra_data": {"scope": scope, "path": path}},
        )

    def on_ambiguous_match(self, scope, path, matches) -> None:
        self._log.warning(
            f"{len(matches)} operations share a canonical path for {path}; "
            f"using {matches[0].id}",
            extra={
                "extra_data": {
                    "scope": scope,
                    "path": path,
                    "operation_ids": [m.id for m in matches],
                }
            },
        )

    def on_error(self, error) -> None:
        level = logging.WARNING if error.severity is ErrorSeverity.WARNING else logging.ERROR
        self._log.log(
            level, error.format_diagnostic_message(), extra={"extra_data": error.to_dict()}
        )

    def on_component_fallback(self, component_id, kind) -> None:
        self._log.info(
            f"Component '{component_id}' not registered; using {kind.value} fallback",
            extra={"extra_data": {"component_id": component_id, "fallback": kind.value}},
        )

    def on_component_not_found(self, component_id) -> None:
        self._log.warning(
            f"Rendering not-found component for '{component_id}'",
            extra={"extra_data": {"component_id": component_id}},
        )


def notify(observer: Optional[ResolutionObserver], hook: str, *args) -> None:
    """Call ``observer.<hook>(*args)``; observer failures are logged, never raised."""
    if observer is None:
        return
    try:
        getattr(observer, hook)(*args)
    except Exception:  # noqa: BLE001
        logger.exception(f"Resolution observer {type(observer).__name__}.{hook} failed")
