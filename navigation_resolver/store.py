"""
Operation store interface and an in-memory implementation.

The resolver only reads from the store. Any persistence layer can be
plugged in by implementing ``OperationStoreProtocol``; the in-memory store
backs tests, demos and small deployments seeded from records.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

from .models import Alias, OperationDescriptor


@runtime_checkable
class OperationStoreProtocol(Protocol):
    """
    Read-only queries the resolver issues against the data store.

    Methods:
        find_aliases: Aliases in ``scope`` whose alias_path equals ``alias_path``.
        get_alias_target: The descriptor an alias points at, or None if dangling.
        find_operations: Descriptors in ``scope`` whose canonical_path is in
            ``canonical_paths``.
    """

    async def find_aliases(self, scope: str, alias_path: str) -> List[Alias]:
        ...

    async def get_alias_target(self, alias: Alias) -> Optional[OperationDescriptor]:
        ...

    async def find_operations(
        self, scope: str, canonical_paths: Iterable[str]
    ) -> List[OperationDescriptor]:
        ...


class InMemoryOperationStore:
    """
    Operation store over in-process record lists.

    Records keep insertion order, so ``find_operations`` returns duplicates
    in the order they were added. ``query_counts`` tracks calls per method.
    """

    def __init__(
        self,
        operations: Optional[Iterable[OperationDescriptor]] = None,
        aliases: Optional[Iterable[Alias]] = None,
    ) -> None:
        self._operations: List[OperationDescriptor] = []
        self._operations_by_id: Dict[str, OperationDescriptor] = {}
        self._aliases: List[Alias] = []
        self.query_counts: Counter = Counter()

        for operation in operations or ():
            self.add_operation(operation)
        for alias in aliases or ():
            self.add_alias(alias)

    @classmethod
    def from_records(
        cls,
        operations: Iterable[Mapping[str, Any]] = (),
        aliases: Iterable[Mapping[str, Any]] = (),
    ) -> "InMemoryOperationStore":
        """Build a store from plain dict records, validating each one."""
        return cls(
            operations=[OperationDescriptor.model_validate(dict(r)) for r in operations],
            aliases=[Alias.model_validate(dict(r)) for r in aliases],
        )

    def add_operation(self, operation: OperationDescriptor) -> None:
        if operation.id in self._operations_by_id:
            raise ValueError(f"Operation '{operation.id}' already exists")
        self._operations.append(operation)
        self._operations_by_id[operation.id] = operation

    def add_alias(self, alias: Alias) -> None:
        self._aliases.append(alias)

    async def find_aliases(self, scope: str, alias_path: str) -> List[Alias]:
        self.query_counts["find_aliases"] += 1
        return [
            alias
            for alias in self._aliases
            if alias.scope == scope and alias.alias_path == alias_path
        ]

    async def get_alias_target(self, alias: Alias) -> Optional[OperationDescriptor]:
        self.query_counts["get_alias_target"] += 1
        if alias.target_id is None:
            return None
        return self._operations_by_id.get(alias.target_id)

    async def find_operations(
        self, scope: str, canonical_paths: Iterable[str]
    ) -> List[OperationDescriptor]:
        self.query_counts["find_operations"] += 1
        wanted = set(canonical_paths)
        return [
            op
            for op in self._operations
            if op.scope == scope and not op.deprecated and op.canonical_path in wanted
        ]

    @property
    def total_queries(self) -> int:
        return sum(self.query_counts.values())
