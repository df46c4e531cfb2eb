# templink/__init__.py
"""
templink: compose handlebars templates from files linked by
`{{include "..."}}` and `{{extends "..."}}` directives.

The module-level functions act on a process-wide default engine; create a
TemplateEngine for isolated state.
"""
from os import PathLike
from typing import Mapping, Optional, Union

from .core import ComposedSet, FunctionRegistry, TemplateEngine, get_default_engine
from .core.registry import HelperFunc
from .exceptions import (
    TemplinkError, ConfigError, TemplateError, TemplateReadError,
    TemplateParseError, TemplateRenderError, OutputError,
)

__version__ = "0.3.0"

def set_base_dir(directory: Union[str, "PathLike[str]", None]) -> None:
    get_default_engine().set_base_dir(directory)

def enable_cache(enabled: bool) -> None:
    get_default_engine().enable_cache(enabled)

def clear_cache() -> None:
    get_default_engine().clear_cache()

def add_fixed_func(name: str, func: HelperFunc) -> None:
    get_default_engine().add_fixed_func(name, func)

def parse_file(name: str) -> ComposedSet:
    return get_default_engine().compose(name)

def parse_file_funcs(name: str, funcs: Optional[Mapping[str, HelperFunc]] = None) -> ComposedSet:
    return get_default_engine().compose_with_funcs(name, funcs)

__all__ = [
    "__version__",
    "ComposedSet",
    "FunctionRegistry",
    "TemplateEngine",
    "get_default_engine",
    "set_base_dir",
    "enable_cache",
    "clear_cache",
    "add_fixed_func",
    "parse_file",
    "parse_file_funcs",
    "TemplinkError",
    "ConfigError",
    "TemplateError",
    "TemplateReadError",
    "TemplateParseError",
    "TemplateRenderError",
    "OutputError",
]
