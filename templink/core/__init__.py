# templink/core/__init__.py
"""
Composition core for templink.

Provides the TemplateEngine (recursive composer, cache and helper registry)
and the ComposedSet it produces.
"""
from .composer import TemplateEngine, CompositionSession, include_graph, get_default_engine
from .composed import ComposedSet
from .registry import FunctionRegistry
from .cache import TemplateCache

__all__ = [
    "TemplateEngine",
    "CompositionSession",
    "ComposedSet",
    "FunctionRegistry",
    "TemplateCache",
    "include_graph",
    "get_default_engine",
]
