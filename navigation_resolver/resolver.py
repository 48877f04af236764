"""
Navigation resolver facade.

Resolution order:
1. Alias lookup (tenant/surface intent)
2. Canonical path lookup
3. None (not found)

Alias matches always take precedence over canonical matches. The cached
entry point memoizes both found and not-found outcomes.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .cache import NOT_CACHED, ResolutionCache
from .config import ResolverSettings
from .exceptions import DataAccessError
from .models import ResolutionResult
from .observer import ResolutionObserver, notify
from .resolvers import AliasResolver, CanonicalResolver, report_data_access_error
from .store import OperationStoreProtocol


class NavigationResolver:
    """
    Resolves request paths to operations, with an injectable cache.

    Attributes:
        cache: The resolution cache used by ``resolve_cached``.
        alias_resolver: First stage of the resolution chain.
        canonical_resolver: Fallback stage.

    Example:
        >>> resolver = NavigationResolver(store, ResolverSettings())
        >>> result = await resolver.resolve_cached("org-a", "/wm/customers/new")
        >>> result.alias_hit
        True
    """

    def __init__(
        self,
        store: OperationStoreProtocol,
        settings: Optional[ResolverSettings] = None,
        *,
        cache: Optional[ResolutionCache] = None,
        observer: Optional[ResolutionObserver] = None,
    ) -> None:
        self.settings = settings or ResolverSettings()
        self.cache = cache if cache is not None else ResolutionCache(self.settings.cache_ttl_seconds)
        self._observer = observer
        self.alias_resolver = AliasResolver(store, self.settings, observer)
        self.canonical_resolver = CanonicalResolver(store, self.settings, observer)

    async def resolve(self, scope: str, path: str) -> Optional[ResolutionResult]:
        """Resolve ``path`` for ``scope`` without consulting the cache."""
        result, _ = await self._resolve(scope, path)
        return result

    async def resolve_cached(self, scope: str, path: str) -> Optional[ResolutionResult]:
        """Resolve through the cache; a miss resolves and stores the outcome.

        If any store lookup failed along the way the outcome is returned but
        not cached, so the next request retries the store.
        """
        cached = self.cache.get(scope, path)
        if cached is not NOT_CACHED:
            notify(self._observer, "on_cache_hit", scope, path, cached)
            return cached

        result, failed = await self._resolve(scope, path)
        if not failed:
            self.cache.put(scope, path, result)
        return result

    async def _resolve(
        self, scope: str, path: str
    ) -> Tuple[Optional[ResolutionResult], bool]:
        failed = False
        result = None

        for stage in (self.alias_resolver, self.canonical_resolver):
            try:
                result = await stage.lookup(scope, path)
            except DataAccessError as error:
                report_data_access_error(self._observer, error)
                failed = True
                continue
            if result is not None:
                break

        if result is None:
            notify(self._observer, "on_not_found", scope, path)
        else:
            notify(self._observer, "on_resolved", scope, path, result)
        return result, failed

    def clear_cache(self) -> None:
        self.cache.clear()
