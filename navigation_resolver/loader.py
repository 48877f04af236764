"""
Component Registry and Loader

Maps a resolved operation's component_id to a loadable page component.

Loading chain for a component_id:
1. The factory registered for that id
2. Otherwise the fallback factory for its ComponentKind
   (List -> area list page, Wizard/Create -> operation create page,
   anything else -> module page)
3. If the chosen factory raises or produces nothing, the not-found factory
4. If that fails too, None

Usage:
    registry = ComponentRegistry()
    registry.register("EntityList:CUSTOMER", module_factory("app.pages.customers", "CustomerList"))

    loader = ComponentLoader(registry)
    component = await loader.load("EntityList:CUSTOMER")
"""

from __future__ import annotations

import importlib
import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .exceptions import ComponentLoadError, ComponentRegistrationError, ResolutionContext
from .observer import ResolutionObserver, notify

logger = logging.getLogger(__name__)

ComponentFactory = Callable[[], Awaitable[Any]]


class ComponentKind(str, Enum):
    """
    Fallback tier for an unregistered component id.

    The kind is inferred from the id by substring convention:
    ``List`` marks a list page, ``Wizard`` or ``Create`` a create page.
    """

    LIST = "list"
    WIZARD = "wizard"
    GENERIC = "generic"

    @classmethod
    def classify(cls, component_id: str) -> "ComponentKind":
        if "List" in component_id:
            return cls.LIST
        if "Wizard" in component_id or "Create" in component_id:
            return cls.WIZARD
        return cls.GENERIC


def module_factory(module_path: str, attribute: str) -> ComponentFactory:
    """Build a factory that imports ``module_path`` and returns ``attribute``."""

    async def factory() -> Any:
        module = importlib.import_module(module_path)
        return getattr(module, attribute)

    factory.__qualname__ = f"module_factory({module_path}:{attribute})"
    return factory


def _builtin(attribute: str) -> ComponentFactory:
    return module_factory("navigation_resolver.pages", attribute)


DEFAULT_FALLBACKS: Dict[ComponentKind, ComponentFactory] = {
    ComponentKind.LIST: _builtin("AreaListPage"),
    ComponentKind.WIZARD: _builtin("OperationCreatePage"),
    ComponentKind.GENERIC: _builtin("ModulePage"),
}

DEFAULT_NOT_FOUND: ComponentFactory = _builtin("NotFoundPage")


class ComponentRegistry:
    """
    Registration and lookup of component factories by component_id.

    The registry is the only persistent structure in loading; loaded
    components are not cached, so each load re-invokes the factory.

    Thread Safety:
        Not thread-safe. Register components at startup or from the event
        loop thread.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, ComponentFactory] = {}

    def register(
        self, component_id: str, factory: ComponentFactory, *, replace: bool = True
    ) -> None:
        """
        Register a factory for a component id.

        Args:
            component_id: Non-empty component identifier, e.g. ``EntityList:CUSTOMER``.
            factory: Async callable returning the component.
            replace: Allow overriding an existing registration.

        Raises:
            ComponentRegistrationError: If the id is empty, the factory is
                not callable, or the id is taken and ``replace`` is False.
        """
        if not component_id or not component_id.strip():
            raise ComponentRegistrationError("Component id cannot be empty")

        if not callable(factory):
            raise ComponentRegistrationError(
                f"Factory for '{component_id}' is not callable: {factory!r}",
                component_id=component_id,
            )

        if component_id in self._factories and not replace:
            raise ComponentRegistrationError(
                f"Component '{component_id}' already registered",
                component_id=component_id,
            )

        self._factories[component_id] = factory
        logger.debug(f"Registered component factory: {component_id}")

    def unregister(self, component_id: str) -> None:
        self._factories.pop(component_id, None)

    def get(self, component_id: str) -> Optional[ComponentFactory]:
        return self._factories.get(component_id)

    def is_registered(self, component_id: str) -> bool:
        return component_id in self._factories

    def list_all(self) -> List[str]:
        """Registered component ids in sorted order."""
        return sorted(self._factories)

    def clear(self) -> None:
        self._factories.clear()

    def __len__(self) -> int:
        return len(self._factories)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._factories


class ComponentLoader:
    """
    Loads components through the registry with tiered fallbacks.

    ``load`` never raises: failures are logged, reported to the observer,
    and replaced by the not-found component, or None as a last resort.
    """

    def __init__(
        self,
        registry: Optional[ComponentRegistry] = None,
        *,
        fallbacks: Optional[Dict[ComponentKind, ComponentFactory]] = None,
        not_found: Optional[ComponentFactory] = None,
        observer: Optional[ResolutionObserver] = None,
    ) -> None:
        self.registry = registry if registry is not None else ComponentRegistry()
        self._fallbacks = dict(DEFAULT_FALLBACKS)
        if fallbacks:
            self._fallbacks.update(fallbacks)
        self._not_found = not_found or DEFAULT_NOT_FOUND
        self._observer = observer

    def factory_for(self, component_id: str) -> ComponentFactory:
        """Return the registered factory, or the fallback for the id's kind."""
        factory = self.registry.get(component_id)
        if factory is not None:
            return factory

        kind = ComponentKind.classify(component_id)
        notify(self._observer, "on_component_fallback", component_id, kind)
        return self._fallbacks[kind]

    async def load(self, component_id: str) -> Optional[Any]:
        """Load the component for ``component_id``."""
        factory = self.factory_for(component_id)
        try:
            return await self._invoke(factory, component_id)
        except ComponentLoadError as error:
            self._report(error)

        notify(self._observer, "on_component_not_found", component_id)
        return await self.load_not_found(component_id)

    async def load_not_found(
        self, component_id: str = "", *, path: Optional[str] = None
    ) -> Optional[Any]:
        """Load the not-found component, or return None if it fails.

        ``component_id`` names the component that failed to load; ``path`` the
        request path that resolved to nothing.
        """
        try:
            return await self._invoke(
                self._not_found, component_id, stage="not_found", path=path
            )
        except ComponentLoadError as error:
            self._report(error)
            return None

    async def _invoke(
        self,
        factory: ComponentFactory,
        component_id: str,
        stage: str = "load",
        path: Optional[str] = None,
    ) -> Any:
        target = component_id or path or "not-found page"
        context = ResolutionContext(component_id=component_id or None, path=path, stage=stage)
        try:
            component = factory()
            if inspect.isawaitable(component):
                component = await component
        except Exception as e:  # noqa: BLE001
            raise ComponentLoadError(
                f"Component factory failed for '{target}'",
                context=context,
                original_exception=e,
            ) from e

        if component is None:
            raise ComponentLoadError(
                f"Component factory returned nothing for '{target}'",
                context=context,
            )
        return component

    def _report(self, error: ComponentLoadError) -> None:
        cause = error.original_exception
        detail = f": {type(cause).__name__}: {cause}" if cause else ""
        # ERROR only when no observer reports it
        level = logging.DEBUG if self._observer is not None else logging.ERROR
        logger.log(level, f"{error.message}{detail} [{error.context.format_summary()}]")
        notify(self._observer, "on_error", error)
