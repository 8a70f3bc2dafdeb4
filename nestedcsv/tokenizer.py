"""Quote-aware splitting of a single CSV line."""
from __future__ import annotations

from typing import List

DELIMITER = ","
QUOTE = '"'


def tokenize(line: str) -> List[str]:
    """Split ``line`` on commas that are not inside double quotes.

    Quote characters toggle the quoted state and are dropped from the output;
    doubled quotes are not treated as an escape. Each field is stripped of
    surrounding whitespace. An unterminated quote is tolerated: the rest of
    the line simply becomes part of the last field.

    >>> tokenize('John,"Doe, Jr.",30')
    ['John', 'Doe, Jr.', '30']
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields
