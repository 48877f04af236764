"""
Path handling for navigation resolution.

Pure string functions: splitting an action tail off a request path,
expanding a base path into equivalent canonical spellings, and deriving
the effective scenario from a tail.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .models import Scenario

DEFAULT_ACTION_WORDS: Tuple[str, ...] = (
    "new",
    "create",
    "list",
    "edit",
    "view",
    "delete",
    "approve",
)

DEFAULT_INDUSTRY_PREFIXES: Tuple[str, ...] = (
    "/wm/",
    "/jewelry/",
    "/salon/",
    "/furniture/",
    "/icecream/",
    "/restaurant/",
)

DEFAULT_ENTERPRISE_NAMESPACE = "/enterprise/"

CREATE_TAILS = frozenset({"/new", "/create"})
LIST_TAILS = frozenset({"", "/list"})


def split_path(
    path: str, action_words: Iterable[str] = DEFAULT_ACTION_WORDS
) -> Tuple[str, str]:
    """Split ``path`` into ``(base_path, tail)``.

    Paths with two or fewer segments are never split. A trailing action
    word is removed and returned as ``"/" + word``.

    >>> split_path("/wm/customers/new")
    ('/wm/customers', '/new')
    >>> split_path("/customers/new")
    ('/customers/new', '')
    """
    segments = [s for s in path.split("/") if s]
    if len(segments) <= 2:
        return path, ""

    last = segments[-1]
    if last not in set(action_words):
        return path, ""

    return "/" + "/".join(segments[:-1]), "/" + last


def generate_candidates(
    base_path: str,
    prefixes: Sequence[str] = DEFAULT_INDUSTRY_PREFIXES,
    namespace: str = DEFAULT_ENTERPRISE_NAMESPACE,
) -> List[str]:
    """Expand ``base_path`` into equivalent canonical path spellings.

    The input is always first. For each industry prefix the path starts
    with, the namespace-rewritten and prefix-stripped forms are added;
    paths outside the namespace also get a namespaced form. Duplicates are
    dropped, keeping first-seen order.

    >>> generate_candidates("/wm/customers")
    ['/wm/customers', '/enterprise/customers', '/customers', '/enterprise/wm/customers']
    """
    candidates = [base_path]

    for prefix in prefixes:
        if base_path.startswith(prefix):
            remainder = base_path[len(prefix):]
            candidates.append(namespace + remainder)
            candidates.append("/" + remainder)

    if not base_path.startswith(namespace):
        candidates.append(namespace.rstrip("/") + base_path)

    return list(dict.fromkeys(candidates))


def effective_scenario(tail: str, default: Scenario) -> Scenario:
    """Return the scenario a tail forces, or ``default`` when it forces none."""
    if tail in CREATE_TAILS:
        return Scenario.CREATE
    if tail in LIST_TAILS:
        return Scenario.LIST
    return default
