"""
Alias and canonical resolvers.

Both resolvers split the request path into a base path and an action tail,
look the base path up in the operation store, and build a
``ResolutionResult`` whose scenario may be overridden by the tail. Store
failures are logged, reported to the observer, and returned as ``None``.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .config import ResolverSettings
from .exceptions import DataAccessError, DataQualityError, ResolutionContext
from .models import Alias, OperationDescriptor, ResolutionResult
from .observer import ResolutionObserver, notify
from .paths import effective_scenario, generate_candidates, split_path
from .store import OperationStoreProtocol

logger = logging.getLogger(__name__)


class AliasResolver:
    """
    Resolves tenant/surface aliases onto operation descriptors.

    Aliases are looked up in the platform scope, whatever the caller's
    scope. The first alias that matches the base path, accepts the tail,
    and has a live target wins.
    """

    def __init__(
        self,
        store: OperationStoreProtocol,
        settings: ResolverSettings,
        observer: Optional[ResolutionObserver] = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._observer = observer

    async def resolve(self, scope: str, path: str) -> Optional[ResolutionResult]:
        """Resolve by alias; store failures are reported and yield None."""
        try:
            return await self.lookup(scope, path)
        except DataAccessError as error:
            report_data_access_error(self._observer, error)
            return None

    async def lookup(self, scope: str, path: str) -> Optional[ResolutionResult]:
        """Resolve by alias, raising DataAccessError if the store fails."""
        base_path, tail = split_path(path, self._settings.action_words)

        try:
            aliases = await self._store.find_aliases(self._settings.platform_scope, base_path)
            for alias in aliases:
                if alias.alias_path != base_path:
                    continue

                if not alias.accepts_tail(tail):
                    logger.debug(
                        f"Alias {alias.id} rejects tail '{tail}' "
                        f"(allowed: {alias.route_suffixes})"
                    )
                    continue

                target = await self._store.get_alias_target(alias)
                if target is None:
                    self._report_dangling(scope, path, alias)
                    continue

                return ResolutionResult.from_operation(
                    target,
                    scenario=effective_scenario(tail, target.scenario),
                    tail=tail,
                    alias_hit=True,
                    alias_path=alias.alias_path,
                )
        except Exception as e:  # noqa: BLE001
            raise _data_access_error("alias", scope, path, e) from e

        return None

    def _report_dangling(self, scope: str, path: str, alias: Alias) -> None:
        logger.debug(f"Alias {alias.id} has no target; skipping")
        notify(
            self._observer,
            "on_error",
            DataQualityError(
                f"Alias {alias.id} points at missing operation '{alias.target_id}'",
                context=ResolutionContext(
                    scope=scope,
                    path=path,
                    stage="alias",
                    metadata={"alias_id": alias.id, "target_id": alias.target_id},
                ),
            ),
        )


class CanonicalResolver:
    """
    Resolves a path directly against operation canonical paths.

    The base path is expanded into candidate spellings; matches are ranked
    by the position of their canonical path in the candidate list.
    """

    def __init__(
        self,
        store: OperationStoreProtocol,
        settings: ResolverSettings,
        observer: Optional[ResolutionObserver] = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._observer = observer

    def candidates(self, base_path: str) -> List[str]:
        return generate_candidates(
            base_path,
            prefixes=self._settings.industry_prefixes,
            namespace=self._settings.enterprise_namespace,
        )

    async def resolve(self, scope: str, path: str) -> Optional[ResolutionResult]:
        """Resolve by canonical path; store failures are reported and yield None."""
        try:
            return await self.lookup(scope, path)
        except DataAccessError as error:
            report_data_access_error(self._observer, error)
            return None

    async def lookup(self, scope: str, path: str) -> Optional[ResolutionResult]:
        """Resolve by canonical path, raising DataAccessError if the store fails."""
        base_path, tail = split_path(path, self._settings.action_words)
        candidates = self.candidates(base_path)

        try:
            matches = await self._store.find_operations(scope, candidates)
            matches = [m for m in matches if not m.deprecated]
            if not matches:
                return None

            ranked = _ranked(matches, candidates)
            operation = ranked[0]
            if len(ranked) > 1:
                notify(self._observer, "on_ambiguous_match", scope, path, ranked)

            return ResolutionResult.from_operation(
                operation,
                scenario=effective_scenario(tail, operation.scenario),
                tail=tail,
                alias_hit=False,
            )
        except Exception as e:  # noqa: BLE001
            raise _data_access_error("canonical", scope, path, e) from e


def _ranked(
    matches: Sequence[OperationDescriptor], candidates: Sequence[str]
) -> List[OperationDescriptor]:
    # sorted() is stable: ties keep store order
    position = {c: i for i, c in enumerate(candidates)}
    return sorted(matches, key=lambda m: position.get(m.canonical_path, len(position)))


def _data_access_error(stage: str, scope: str, path: str, exc: Exception) -> DataAccessError:
    return DataAccessError(
        f"{stage.capitalize()} lookup failed for {path}",
        context=ResolutionContext(scope=scope, path=path, stage=stage),
        original_exception=exc,
    )


def report_data_access_error(
    observer: Optional[ResolutionObserver], error: DataAccessError
) -> None:
    """Log a store failure and hand it to the observer.

    Logged at DEBUG when an observer is attached; the observer reports it.
    """
    exc = error.original_exception
    level = logging.DEBUG if observer is not None else logging.ERROR
    logger.log(
        level,
        f"{error.message}: {type(exc).__name__}: {exc} [{error.context.format_summary()}]",
    )
    notify(observer, "on_error", error)
