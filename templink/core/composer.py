# templink/core/composer.py
"""
Contains the TemplateEngine, which reads template files, resolves their
`extends` / `include` directives and compiles everything into one ComposedSet.
"""
import threading
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Union

import pybars # type: ignore
import structlog

from templink.config.settings import EngineConfig, normalize_base_dir
from templink.exceptions import TemplateParseError, TemplateReadError

from .cache import TemplateCache
from .composed import ComposedSet
from .directives import find_includes, split_extends
from .registry import FunctionRegistry, HelperFunc

log = structlog.get_logger(__name__)

@dataclass
class CompositionSession:
    # per-call cycle guard; never outlives the top-level compose call.
    visited: Set[str] = field(default_factory=set)
    in_progress: Set[str] = field(default_factory=set)

    def __contains__(self, name: str) -> bool:
        return name in self.visited or name in self.in_progress

@dataclass(frozen=True)
class _CompositionContext:
    config: EngineConfig
    compiler: Any

class TemplateEngine:
    """
    Owns a base directory, a cache switch, a TemplateCache and a
    FunctionRegistry. Safe to share between threads: every mutation of that
    state goes through one lock, and a composition works on a snapshot taken
    when it starts.
    """
    def __init__(self, config: Optional[EngineConfig] = None, registry: Optional[FunctionRegistry] = None):
        self._lock = threading.RLock()
        self._config = config.snapshot() if config else EngineConfig()
        self.registry = registry or FunctionRegistry()
        self.cache = TemplateCache()

    @property
    def config(self) -> EngineConfig:
        with self._lock:
            return self._config.snapshot()

    @property
    def base_dir(self) -> str:
        with self._lock:
            return self._config.base_dir

    @property
    def cache_enabled(self) -> bool:
        with self._lock:
            return self._config.cache_enabled

    def set_base_dir(self, directory: Union[str, "PathLike[str]", None]) -> None:
        with self._lock:
            self._config.base_dir = normalize_base_dir(directory)
        log.debug("base_dir_set", base_dir=self._config.base_dir)

    def enable_cache(self, enabled: bool) -> None:
        with self._lock:
            self._config.cache_enabled = enabled
            if not enabled:
                self.cache.clear()
        log.debug("template_cache_toggled", enabled=enabled)

    def clear_cache(self) -> None:
        with self._lock:
            self.cache.clear()

    def add_fixed_func(self, name: str, func: HelperFunc) -> None:
        self.registry.add_fixed(name, func)

    def compose(self, name: str) -> ComposedSet:
        """Composes `name` using only the fixed helpers."""
        return self.compose_with_funcs(name, {})

    def compose_with_funcs(self, name: str, funcs: Optional[Mapping[str, HelperFunc]] = None) -> ComposedSet:
        """
        Composes `name` with `funcs` layered over the fixed helpers.

        With caching enabled a stored set for `name` is returned as is, even
        when `funcs` differ from the ones it was built with.
        """
        with self._lock:
            config = self._config.snapshot()
            helpers = self.registry.merged(funcs)

        if config.cache_enabled:
            cached = self.cache.get(name)
            if cached is not None:
                log.debug("template_cache_hit", name=name)
                return cached
            log.debug("template_cache_miss", name=name)

        ctx = _CompositionContext(config=config, compiler=pybars.Compiler())
        with structlog.contextvars.bound_contextvars(template_root=name):
            composed = self._compose(ctx, ComposedSet(name, helpers), name, CompositionSession())
            log.info("template_composed", units=composed.names)

        # store only while caching is still on; enable_cache clears under this same lock.
        with self._lock:
            if self._config.cache_enabled:
                composed = self.cache.store(name, composed)
        return composed

    # Aliases matching the names used by the module-level API.
    parse_file = compose
    parse_file_funcs = compose_with_funcs

    def _compose(self, ctx: _CompositionContext, composed: ComposedSet, name: str, session: CompositionSession) -> ComposedSet:
        session.in_progress.add(name)
        body = self._read_body(ctx.config, name)

        parent, body = split_extends(body)
        if parent is not None:
            composed.set_parent(name, parent)
            if parent in session:
                log.debug("extends_parent_already_composed", name=name, parent=parent)
            else:
                self._compose(ctx, composed, parent, session)

        self._parse_into(ctx, composed, name, body)
        session.visited.add(name)
        session.in_progress.discard(name)

        for included in find_includes(body):
            if included in session:
                log.debug("include_already_composed", name=name, included=included)
                continue
            self._compose(ctx, composed, included, session)
        return composed

    def _read_body(self, config: EngineConfig, name: str) -> str:
        path = config.resolve(name)
        try:
            body = Path(path).read_text(encoding=config.encoding)
        except (OSError, UnicodeDecodeError) as e:
            log.error("template_read_failed", name=name, path=path, error=str(e))
            raise TemplateReadError(f"Failed to read template '{name}' from {path}: {e}", name=name, path=path) from e
        log.debug("template_file_read", name=name, path=path, size=len(body))
        return body

    def _parse_into(self, ctx: _CompositionContext, composed: ComposedSet, name: str, body: str) -> None:
        try:
            compiled = ctx.compiler.compile(body)
        except Exception as e:
            log.error("template_compilation_failed", name=name, error=str(e))
            raise TemplateParseError(f"Failed to compile template '{name}': {e}", name=name) from e
        composed.add(name, compiled, body)
        log.debug("template_unit_parsed", name=name)

def include_graph(composed: ComposedSet) -> Dict[str, List[str]]:
    """Maps each unit of `composed` to the include directives found in its parsed source."""
    return {name: find_includes(composed.sources[name]) for name in composed.names}

DEFAULT_ENGINE = TemplateEngine()

def get_default_engine() -> TemplateEngine:
    return DEFAULT_ENGINE

