"""
Navigation service composition.

Creates a fully wired NavigationService (resolver, cache, component
loader) from settings. The rendering layer owns one service per process.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from .cache import ResolutionCache
from .config import ResolverSettings, get_settings
from .loader import ComponentFactory, ComponentLoader, ComponentRegistry
from .logger import configure_logging
from .models import ResolutionResult
from .observer import LoggingResolutionObserver, ResolutionObserver
from .resolver import NavigationResolver
from .store import OperationStoreProtocol

logger = logging.getLogger(__name__)


class NavigationDiagnostics(BaseModel):
    """Snapshot of cache and loader state for operators."""

    model_config = ConfigDict(frozen=True)

    cache_size: int
    cache_hits: int
    cache_misses: int
    cache_ttl_seconds: float
    registered_components: int


class NavigationService:
    """Entry point for the rendering layer: resolve paths and load components."""

    def __init__(self, resolver: NavigationResolver, loader: ComponentLoader) -> None:
        self.resolver = resolver
        self.loader = loader

    async def resolve(self, scope: str, path: str) -> Optional[ResolutionResult]:
        return await self.resolver.resolve(scope, path)

    async def resolve_cached(self, scope: str, path: str) -> Optional[ResolutionResult]:
        return await self.resolver.resolve_cached(scope, path)

    def clear_resolution_cache(self) -> None:
        self.resolver.clear_cache()

    async def load(self, component_id: str) -> Optional[Any]:
        return await self.loader.load(component_id)

    async def resolve_component(
        self, scope: str, path: str
    ) -> tuple[Optional[ResolutionResult], Optional[Any]]:
        """Resolve ``path`` through the cache and load its component.

        Returns the resolution result (None when nothing matched) and the
        component to render, which is the not-found page for unresolved paths.
        """
        result = await self.resolver.resolve_cached(scope, path)
        if result is None:
            return None, await self.loader.load_not_found(path=path)
        return result, await self.loader.load(result.component_id)

    def register_component(self, component_id: str, factory: ComponentFactory) -> None:
        self.loader.registry.register(component_id, factory)

    def get_registered_component_ids(self) -> List[str]:
        return self.loader.registry.list_all()

    def diagnostics(self) -> NavigationDiagnostics:
        cache = self.resolver.cache
        return NavigationDiagnostics(
            cache_size=len(cache),
            cache_hits=cache.hits,
            cache_misses=cache.misses,
            cache_ttl_seconds=cache.ttl_seconds,
            registered_components=len(self.loader.registry),
        )


def create_navigation_service(
    store: OperationStoreProtocol,
    settings: Optional[ResolverSettings] = None,
    *,
    observer: Optional[ResolutionObserver] = None,
    clock: Optional[Callable[[], float]] = None,
    registry: Optional[ComponentRegistry] = None,
    configure_logs: bool = False,
) -> NavigationService:
    """
    Wire a NavigationService.

    Args:
        store: Operation store the resolver reads from.
        settings: Resolver settings; the process settings when omitted.
        observer: Resolution observer; a logging observer when omitted.
        clock: Monotonic clock for the cache, injectable for tests.
        registry: Component registry; a new empty one when omitted.
        configure_logs: Install the package log handler from settings.
    """
    settings = settings or get_settings()
    if configure_logs:
        configure_logging(settings.log_level, json_output=settings.json_logs)

    observer = observer if observer is not None else LoggingResolutionObserver()

    cache = ResolutionCache(ttl_seconds=settings.cache_ttl_seconds, clock=clock)
    resolver = NavigationResolver(store, settings, cache=cache, observer=observer)
    loader = ComponentLoader(registry, observer=observer)

    logger.info(
        f"Navigation service ready (cache_ttl={settings.cache_ttl_seconds}s, "
        f"prefixes={len(settings.industry_prefixes)}, "
        f"components={len(loader.registry)})"
    )
    return NavigationService(resolver, loader)
