# templink/core/helpers.py
"""
Handlebars helper functions shipped with templink.
"""
import datetime
from typing import Any

def inert_directive_helper(*args: Any) -> str:
    """
    Stands in for `include` / `extends` at render time. Those directives are
    consumed while composing; if pybars ever evaluates the literal directive
    text it must contribute nothing to the output. Do not make this perform a
    real inclusion: visible output of another unit is written with a partial.
    """
    return ""

def add_helper(*args: Any) -> float:
    """
    Pybars helper to sum numeric arguments. Ignores non-numeric.
    The first argument passed by pybars is the 'this' context, which we ignore.
    """
    numeric_args = args[1:]
    return sum(float(val) for val in numeric_args if isinstance(val, (int, float)) or (isinstance(val, str) and val.replace('.', '', 1).isdigit()))

def now_utc_iso_helper(*args: Any) -> str:
    """
    Pybars helper to output the current UTC timestamp in ISO 8601 format.
    Ignores arguments.
    """
    return datetime.datetime.now(datetime.timezone.utc).isoformat()

def repeat_helper(_this: Any, text: Any = "", count: Any = 0) -> str:
    # {{repeat "-" 3}} -> "---"
    try:
        return str(text) * int(count)
    except (TypeError, ValueError):
        return ""

# Helpers every registry starts with; see FunctionRegistry.
DIRECTIVE_STUBS = {
    "include": inert_directive_helper,
    "extends": inert_directive_helper,
}

# Optional helpers the CLI registers as fixed functions.
BUILTIN_HELPERS = {
    "add": add_helper,
    "now": now_utc_iso_helper,
}
