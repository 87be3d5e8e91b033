"""
Balanced brace scanning.

Finds the first brace-delimited span in free text that parses as a JSON
object. Braces inside JSON string literals do not count towards balance.
"""

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from cosmoscope.errors import ParseError


logger = logging.getLogger(__name__)


def balanced_span_bounds(text: str) -> List[Tuple[int, int]]:
    """
    Locate every balanced ``{...}`` span in one pass.

    Quotes are tracked only inside an open brace, so apostrophes and stray
    quotes in surrounding prose do not affect balance. Unmatched ``}`` at
    the top level are ignored; unmatched ``{`` never produce a span.

    Args:
        text: Text to scan

    Returns:
        (start, end) index pairs, ``end`` inclusive, ordered by start
    """
    bounds: List[Tuple[int, int]] = []
    open_braces: List[int] = []
    in_string = False
    escaped = False

    for i, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == "{":
            open_braces.append(i)
        elif not open_braces:
            continue
        elif char == '"':
            in_string = True
        elif char == "}":
            bounds.append((open_braces.pop(), i))

    bounds.sort()
    return bounds


def iter_balanced_spans(text: str) -> Iterator[str]:
    """Yield every balanced ``{...}`` span, ordered by opening position."""
    for start, end in balanced_span_bounds(text):
        yield text[start : end + 1]


def parse_object(span: str) -> Dict[str, Any]:
    """
    Strictly parse a span as a JSON object.

    Raises:
        ParseError: If the span is not valid JSON, nests too deeply, or is
            not an object
    """
    try:
        data = json.loads(span)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Span is not valid JSON: {e}")
    if not isinstance(data, dict):
        raise ParseError(f"Span parsed to {type(data).__name__}, expected object")
    return data


def find_balanced_object(text: str) -> Optional[Tuple[str, Dict[str, Any]]]:
    """
    Locate the first balanced span that parses as a JSON object.

    A span that balances but does not parse (``{placeholder}`` prose, a
    truncated command) is skipped and the search moves on, so a valid
    command later in the reply is still found.

    Returns:
        Tuple of (span, parsed object), or None if no span parses
    """
    for span in iter_balanced_spans(text):
        try:
            return span, parse_object(span)
        except ParseError as e:
            logger.debug(f"Skipping unparseable span: {e}")
    return None


def find_balanced_span(text: str) -> Optional[str]:
    """Return the first parseable balanced span, or None."""
    found = find_balanced_object(text)
    return found[0] if found else None
