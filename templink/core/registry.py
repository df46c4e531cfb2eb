# templink/core/registry.py
"""
Two-tier mapping of helper names to callables.

The fixed tier persists for the life of the registry and is cumulative; it
starts with inert stubs for `include` and `extends`. Those stubs always render
as an empty string: the directives only matter to the composer, which scans
for them before pybars ever sees the text. Call-scoped helpers are layered on
top for a single composition and are never stored here.
"""
import threading
from typing import Any, Callable, Dict, Mapping, Optional

import structlog

from .helpers import DIRECTIVE_STUBS

log = structlog.get_logger(__name__)

HelperFunc = Callable[..., Any]

class FunctionRegistry:
    def __init__(self):
        self._lock = threading.Lock()
        self._fixed: Dict[str, HelperFunc] = dict(DIRECTIVE_STUBS)

    def add_fixed(self, name: str, func: HelperFunc) -> None:
        if not callable(func):
            raise TypeError(f"helper '{name}' must be callable, got {type(func).__name__}")
        with self._lock:
            replaced = name in self._fixed
            self._fixed[name] = func
        log.debug("fixed_helper_registered", name=name, replaced=replaced)

    def fixed(self) -> Dict[str, HelperFunc]:
        with self._lock:
            return dict(self._fixed)

    def merged(self, call_scoped: Optional[Mapping[str, HelperFunc]] = None) -> Dict[str, HelperFunc]:
        """Fresh mapping: fixed tier, then call-scoped entries overriding it."""
        helpers = self.fixed()
        if call_scoped:
            helpers.update(call_scoped)
        return helpers

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._fixed

    def __len__(self) -> int:
        with self._lock:
            return len(self._fixed)
