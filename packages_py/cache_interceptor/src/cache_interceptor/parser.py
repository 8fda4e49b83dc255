"""
Cache-Control header parsing.

Only the directive syntax is interpreted here; the interceptor decides what
the directives mean.
"""
import re
from typing import Dict, Iterable, Optional, Union

_QUOTES = ("'", '"')
_INTEGER = re.compile(r"[+-]?[0-9]+")


def strip_quotes(value: Optional[str]) -> Optional[str]:
    """Strip one layer of matching single or double quotes."""
    if value is None:
        return None
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse an integer, returning None for absent or non-numeric values."""
    if value is None:
        return None
    value = value.strip()
    # int() would also take underscores and non-ASCII digits
    if not _INTEGER.fullmatch(value):
        return None
    return int(value)


def parse_cache_control(
    values: Union[None, str, Iterable[str]],
) -> Dict[str, Optional[str]]:
    """
    Parse one or more Cache-Control header values into a directive map.

    Directive names are lower-cased. Flag directives such as ``no-cache`` map
    to None, which stays distinct from an explicit empty value (``a=``).
    When a directive repeats, the last occurrence wins.

    Args:
        values: A header value, a list of header lines, or None

    Returns:
        Mapping of directive name to its optional value
    """
    directives: Dict[str, Optional[str]] = {}

    if values is None:
        return directives
    if isinstance(values, str):
        values = [values]

    for line in values:
        for token in line.split(","):
            if "=" in token:
                name, value = token.split("=", 1)
                value = strip_quotes(value.strip())
            else:
                name, value = token, None

            name = strip_quotes(name.strip())
            if not name:
                continue
            directives[name.lower()] = value

    return directives


def parse_max_age(directives: Dict[str, Optional[str]]) -> Optional[int]:
    """Extract max-age in seconds, or None when absent or not an integer."""
    return parse_int(directives.get("max-age"))


def is_valid_http_status_code(status_code: int) -> bool:
    """Check whether a status code belongs to the cacheable 2xx class."""
    return 200 <= status_code < 300
