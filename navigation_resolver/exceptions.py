"""
Structured exception hierarchy for navigation resolution.

All exceptions include:
- context: Scope, path and component being resolved, plus a correlation_id
- category: Where the failure came from (data access, component load, ...)
- severity: ERROR, WARNING, RECOVERABLE
- resolution_hints: Actionable suggestions for operators

Resolution and loading never raise these to callers; they are created to
be logged and handed to the observer. Only caller misuse (bad settings,
bad registrations) raises.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(str, Enum):
    """Error severity levels for triage and alerting"""
    CRITICAL = "critical"
    ERROR = "error"
    RECOVERABLE = "recoverable"
    WARNING = "warning"


class ErrorCategory(str, Enum):
    """Error categories for diagnostics"""
    DATA_ACCESS = "data_access"          # Operation/alias store failures
    COMPONENT_LOAD = "component_load"    # Component factory failures
    CONFIGURATION = "configuration"      # Invalid settings or registrations
    DATA_QUALITY = "data_quality"        # Aliases pointing at missing operations


@dataclass
class ResolutionContext:
    """Context of the navigation request that failed"""

    scope: Optional[str] = None
    path: Optional[str] = None
    component_id: Optional[str] = None
    stage: Optional[str] = None

    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context for logging"""
        return {
            k: v for k, v in self.__dict__.items()
            if v is not None and not k.startswith('_')
        }

    def format_summary(self) -> str:
        """Human-readable one-line summary"""
        parts = []
        if self.scope:
            parts.append(f"scope={self.scope}")
        if self.path:
            parts.append(f"path={self.path}")
        if self.component_id:
            parts.append(f"component={self.component_id}")
        if self.stage:
            parts.append(f"stage={self.stage}")
        if self.correlation_id:
            parts.append(f"correlation_id={self.correlation_id}")
        return " | ".join(parts)


@dataclass
class ResolutionHint:
    """Actionable guidance for a known failure"""

    title: str
    description: str
    steps: List[str]


class NavigationError(Exception):
    """
    Base exception for navigation resolution with structured context.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ResolutionContext] = None,
        category: ErrorCategory = ErrorCategory.DATA_ACCESS,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        resolution_hints: Optional[List[ResolutionHint]] = None,
        original_exception: Optional[BaseException] = None,
        **kwargs
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ResolutionContext()
        self.category = category
        self.severity = severity
        self.resolution_hints = resolution_hints or []
        self.original_exception = original_exception
        self.additional_data = kwargs

    def format_diagnostic_message(self) -> str:
        """
        Format a multi-line diagnostic message for logs.

        Includes the message, severity, context, resolution hints and the
        original exception, if any.
        """
        lines = [
            f"{'='*80}",
            f"ERROR: {self.message}",
            f"Severity: {self.severity.value.upper()} | Category: {self.category.value}",
            f"{'='*80}",
            "",
            "RESOLUTION CONTEXT:",
        ]

        context_dict = self.context.to_dict()
        for key, value in context_dict.items():
            if key == 'metadata' and isinstance(value, dict):
                for meta_key, meta_value in value.items():
                    lines.append(f"  {meta_key}: {meta_value}")
            else:
                lines.append(f"  {key}: {value}")

        if self.resolution_hints:
            lines.append("")
            lines.append("RESOLUTION HINTS:")
            for i, hint in enumerate(self.resolution_hints, 1):
                lines.append(f"\n{i}. {hint.title}")
                lines.append(f"   {hint.description}")
                if hint.steps:
                    lines.append("   Steps:")
                    for step in hint.steps:
                        lines.append(f"     - {step}")

        if self.original_exception:
            lines.append("")
            lines.append("ORIGINAL EXCEPTION:")
            lines.append(
                f"  {type(self.original_exception).__name__}: {self.original_exception}"
            )

        lines.append("")
        lines.append(f"{'='*80}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for structured logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context.to_dict(),
            "resolution_hints": [
                {
                    "title": hint.title,
                    "description": hint.description,
                    "steps": hint.steps,
                }
                for hint in self.resolution_hints
            ],
            "original_exception": str(self.original_exception) if self.original_exception else None,
            **self.additional_data
        }


class DataAccessError(NavigationError):
    """Operation or alias store failed during a lookup"""
    def __init__(self, message: str, **kwargs):
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Check Operation Store Connectivity",
                    description="The lookup degraded to 'no match'; users see a not-found page",
                    steps=[
                        "Verify the operation store is reachable",
                        "Check store credentials and query timeouts",
                        "Clear the resolution cache once the store recovers",
                    ],
                )
            ]
        super().__init__(
            message,
            category=ErrorCategory.DATA_ACCESS,
            severity=ErrorSeverity.RECOVERABLE,
            **kwargs,
        )


class ComponentLoadError(NavigationError):
    """Component factory raised or produced nothing"""
    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.COMPONENT_LOAD,
            severity=kwargs.pop("severity", ErrorSeverity.WARNING),
            **kwargs,
        )


class ConfigurationError(NavigationError):
    """Invalid resolver settings"""
    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)


class ComponentRegistrationError(ConfigurationError):
    """Invalid component id or factory passed to the registry"""
    def __init__(self, message: str, component_id: Optional[str] = None, **kwargs):
        if component_id is not None:
            kwargs.setdefault("context", ResolutionContext(component_id=component_id))
        super().__init__(message, **kwargs)


class DataQualityError(NavigationError):
    """Stored navigation records are inconsistent, e.g. a dangling alias"""
    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.DATA_QUALITY,
            severity=kwargs.pop("severity", ErrorSeverity.WARNING),
            **kwargs,
        )
