"""
Navigation data models.

Operation descriptors and aliases are read-only records owned by the
administrative tooling; resolution results are transient values produced
by the resolver and handed to the component loader.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Scenario(str, Enum):
    """Rendering mode applied to a resolved operation."""

    CREATE = "CREATE"
    LIST = "LIST"
    DETAIL = "DETAIL"
    APPROVE = "APPROVE"


class OperationDescriptor(BaseModel):
    """
    Canonical definition of a business operation.

    Attributes:
        id: Opaque identifier.
        scope: Organization the descriptor belongs to.
        code: Short business code, unique within the scope.
        name: Display name.
        classification_code: Business taxonomy string, opaque here.
        canonical_path: Path this operation is addressed by.
        component_id: Identifier of the component that renders it.
        scenario: Default rendering mode.
        parameters: Pass-through parameters for the component.
        deprecated: Deprecated descriptors never match a path.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    scope: str
    code: str
    name: str
    classification_code: str = ""
    canonical_path: str
    component_id: str
    scenario: Scenario = Scenario.LIST
    parameters: Dict[str, Any] = Field(default_factory=dict)
    deprecated: bool = False


class Alias(BaseModel):
    """
    Surface path that redirects onto an operation descriptor.

    An empty ``route_suffixes`` list accepts any tail. ``target_id`` is the
    single outbound relationship; ``None`` marks a dangling alias.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    scope: str
    alias_path: str
    route_suffixes: List[str] = Field(default_factory=list)
    target_id: Optional[str] = None

    def accepts_tail(self, tail: str) -> bool:
        """Return True if ``tail`` is allowed on this alias."""
        if not tail or not self.route_suffixes:
            return True
        return tail.lstrip("/") in self.route_suffixes


class ResolutionResult(BaseModel):
    """
    Outcome of resolving a request path to an operation.

    Carries the matched descriptor's fields, whether an alias produced the
    match, the action tail split off the path, and the effective scenario.

    Example:
        >>> result = await resolver.resolve("org-a", "/wm/customers/new")
        >>> result.component_id, result.scenario, result.alias_hit
        ('EntityWizard:CUSTOMER', <Scenario.CREATE: 'CREATE'>, True)
    """

    model_config = ConfigDict(frozen=True)

    operation_id: str
    code: str
    name: str
    classification_code: str = ""
    canonical_path: str
    component_id: str
    scenario: Scenario
    parameters: Dict[str, Any] = Field(default_factory=dict)
    alias_hit: bool
    tail: str = ""
    alias_path: Optional[str] = None

    @classmethod
    def from_operation(
        cls,
        operation: OperationDescriptor,
        *,
        scenario: Scenario,
        tail: str,
        alias_hit: bool,
        alias_path: Optional[str] = None,
    ) -> "ResolutionResult":
        return cls(
            operation_id=operation.id,
            code=operation.code,
            name=operation.name,
            classification_code=operation.classification_code,
            canonical_path=operation.canonical_path,
            component_id=operation.component_id,
            scenario=scenario,
            parameters=dict(operation.parameters),
            alias_hit=alias_hit,
            tail=tail,
            alias_path=alias_path,
        )
