"""
General use constants.

The character sets are meant to be used as predicates:
```
char_while(const.WHITESPACES.__contains__)
```
"""

from __future__ import annotations
from typing import Final

import string

UNBOUNDED: Final[int] = -1
"""Repetition bound that leaves the count open. Any negative number works the same."""

WHITESPACES: Final[frozenset[str]] = frozenset({" ", "\t", "\n", "\r", "\f"})
DECIMAL: Final[frozenset[str]] = frozenset(string.digits)
ALPHABETIC: Final[frozenset[str]] = frozenset(string.ascii_letters)
ALNUM: Final[frozenset[str]] = ALPHABETIC | DECIMAL
