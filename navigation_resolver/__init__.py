"""
Navigation resolver package.

Maps surface request paths (tenant, industry or legacy spellings) onto
canonical business operations and loads the page component that renders
each one.
"""

from _version import __version__, get_full_version, get_version_dict

from .cache import NOT_CACHED, ResolutionCache
from .config import ResolverSettings, get_settings, load_resolver_settings
from .exceptions import (ComponentLoadError, ComponentRegistrationError,
                         ConfigurationError, DataAccessError, DataQualityError,
                         ErrorCategory, ErrorSeverity, NavigationError,
                         ResolutionContext)
from .factory import (NavigationDiagnostics, NavigationService,
                      create_navigation_service)
from .loader import (ComponentKind, ComponentLoader, ComponentRegistry,
                     module_factory)
from .logger import JSONFormatter, configure_logging
from .models import Alias, OperationDescriptor, ResolutionResult, Scenario
from .observer import LoggingResolutionObserver, ResolutionObserver
from .paths import effective_scenario, generate_candidates, split_path
from .resolver import NavigationResolver
from .resolvers import AliasResolver, CanonicalResolver
from .store import InMemoryOperationStore, OperationStoreProtocol

__all__ = [
    # Version
    "__version__",
    "get_full_version",
    "get_version_dict",
    # Models
    "Scenario",
    "OperationDescriptor",
    "Alias",
    "ResolutionResult",
    # Paths
    "split_path",
    "generate_candidates",
    "effective_scenario",
    # Store
    "OperationStoreProtocol",
    "InMemoryOperationStore",
    # Resolution
    "AliasResolver",
    "CanonicalResolver",
    "NavigationResolver",
    "ResolutionCache",
    "NOT_CACHED",
    # Components
    "ComponentKind",
    "ComponentRegistry",
    "ComponentLoader",
    "module_factory",
    # Service
    "NavigationService",
    "NavigationDiagnostics",
    "create_navigation_service",
    # Config
    "ResolverSettings",
    "get_settings",
    "load_resolver_settings",
    # Observability
    "ResolutionObserver",
    "LoggingResolutionObserver",
    "JSONFormatter",
    "configure_logging",
    # Errors
    "NavigationError",
    "DataAccessError",
    "ComponentLoadError",
    "DataQualityError",
    "ConfigurationError",
    "ComponentRegistrationError",
    "ErrorCategory",
    "ErrorSeverity",
    "ResolutionContext",
]
