"""
Built-in generic page components.

These back the loader's fallback tiers: an area list page, an operation
create page, a generic module page and the not-found page. The rendering
layer instantiates them with the resolution result as props.
"""

from __future__ import annotations

from typing import Any, Dict


class PageComponent:
    """Base class for page components returned by the component loader."""

    component_name = "Page"

    def __init__(self, **props: Any) -> None:
        self.props: Dict[str, Any] = props

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.props!r})"


class AreaListPage(PageComponent):
    component_name = "AreaListPage"


class OperationCreatePage(PageComponent):
    component_name = "OperationCreatePage"


class ModulePage(PageComponent):
    component_name = "ModulePage"


class NotFoundPage(PageComponent):
    component_name = "NotFoundPage"
