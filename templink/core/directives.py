# templink/core/directives.py
"""
Locates `include` / `extends` directives inside raw template text.

A directive is a delimited span `{{ keyword "argument" }}` holding exactly two
whitespace-separated tokens. Anything else between the delimiters is left
alone: it belongs to the handlebars engine, and malformed directives are just
text. The argument loses one character on each side (the quotes); there is
no escaping, so template names cannot contain a quote character.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import structlog

log = structlog.get_logger(__name__)

OPEN_TOKEN = "{{"
CLOSE_TOKEN = "}}"
INCLUDE_KEYWORD = "include"
EXTENDS_KEYWORD = "extends"
DIRECTIVE_KEYWORDS = frozenset({INCLUDE_KEYWORD, EXTENDS_KEYWORD})

@dataclass(frozen=True)
class Directive:
    keyword: str
    argument: str
    start: int  # offset of the open token
    end: int    # offset just past the close token

def iter_spans(body: str) -> Iterator[Tuple[int, int, str]]:
    """
    Yields `(start, end, inner_text)` for each delimited span, left to right.
    The next search resumes at the previous close token.
    """
    pos = 0
    while True:
        start = body.find(OPEN_TOKEN, pos)
        if start < 0:
            return
        inner_start = start + len(OPEN_TOKEN)
        close = body.find(CLOSE_TOKEN, inner_start)
        if close < 0:
            return
        yield start, close + len(CLOSE_TOKEN), body[inner_start:close]
        pos = close

def parse_directive(inner: str, start: int = 0, end: int = 0) -> Optional[Directive]:
    tokens = inner.split()
    if len(tokens) != 2 or tokens[0] not in DIRECTIVE_KEYWORDS:
        return None
    return Directive(keyword=tokens[0], argument=tokens[1][1:-1], start=start, end=end)

def iter_directives(body: str) -> Iterator[Directive]:
    for start, end, inner in iter_spans(body):
        directive = parse_directive(inner, start, end)
        if directive is not None:
            yield directive

def find_includes(body: str) -> List[str]:
    """Every include argument in `body`, in order of appearance, duplicates kept."""
    names = [d.argument for d in iter_directives(body) if d.keyword == INCLUDE_KEYWORD]
    if names:
        log.debug("include_directives_found", names=names)
    return names

def split_extends(body: str) -> Tuple[Optional[str], str]:
    """
    Checks only the first delimited span of `body`. When it is an extends
    directive, returns `(parent_name, text_after_the_directive)`; otherwise
    `(None, body)` unchanged.
    """
    first_span = next(iter_spans(body), None)
    if first_span is None:
        return None, body
    start, end, inner = first_span
    directive = parse_directive(inner, start, end)
    if directive is None or directive.keyword != EXTENDS_KEYWORD:
        return None, body
    log.debug("extends_directive_found", parent=directive.argument)
    return directive.argument, body[directive.end:]
