# templink/core/composed.py
"""
The aggregate of named, compiled handlebars units produced by one composition.
"""
from typing import Any, Callable, Dict, List, Mapping, Optional

import pybars # type: ignore
import structlog

from templink.exceptions import TemplateRenderError

log = structlog.get_logger(__name__)

class ComposedSet:
    """
    Named units compiled by pybars, plus the helper mapping frozen when the
    composition started. Every unit is available to every other unit as a
    partial when rendering.
    """
    def __init__(self, root: str, helpers: Mapping[str, Callable[..., Any]]):
        self.root = root
        self.helpers: Dict[str, Callable[..., Any]] = dict(helpers)
        self.units: Dict[str, Callable[..., Any]] = {}
        self.sources: Dict[str, str] = {}
        self.parents: Dict[str, str] = {}
        self.order: List[str] = []

    def add(self, name: str, compiled: Callable[..., Any], source: str) -> None:
        if name not in self.units:
            self.order.append(name)
        self.units[name] = compiled
        self.sources[name] = source

    def set_parent(self, name: str, parent: str) -> None:
        self.parents[name] = parent

    @property
    def names(self) -> List[str]:
        return list(self.order)

    def __contains__(self, name: str) -> bool:
        return name in self.units

    def __len__(self) -> int:
        return len(self.units)

    def render(self, context: Any, name: Optional[str] = None) -> str:
        """Executes unit `name` (default: the root) against `context`."""
        unit_name = name or self.root
        if unit_name not in self.units:
            raise TemplateRenderError(f"No template named '{unit_name}' in composed set for '{self.root}'", name=unit_name)
        log.debug("rendering_template_unit", name=unit_name, root=self.root)
        try:
            rendered = self.units[unit_name](context, helpers=self.helpers, partials=self.units)
        except Exception as e:
            log.error("template_rendering_error_occurred", name=unit_name, error_message=str(e), exc_info=True)
            if isinstance(e, pybars.PybarsError) and "missing" in str(e).lower():
                raise TemplateRenderError(
                    f"Template render failed for '{unit_name}': a helper or partial might be missing. "
                    f"Pybars detail: {e}", name=unit_name) from e
            raise TemplateRenderError(f"Template render failed for '{unit_name}': {e}", name=unit_name) from e
        return str(rendered)

    def __repr__(self) -> str:
        return f"ComposedSet(root={self.root!r}, units={self.order!r})"
