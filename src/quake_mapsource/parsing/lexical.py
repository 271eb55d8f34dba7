"""
Lexical rules for the MAP grammar.

Every rule is a method taking a character offset and returning either a
Match (value + offset after the match) or None. A failed rule never raises;
instead it records what it expected at the offset where it gave up, and the
ParseState keeps only the furthest such offset. That is what a MapParseError
reports once the top-level rule fails.

Rules:
- linebreak:   "\\n" / "\\r\\n"
- whitespace:  [ \\t]
- commentline: "//" " "* [^\\n\\r]+
- linesep:     (linebreak / commentline / whitespace)+
- float32:     "-"? [0-9]+ ("." [0-9]*)?   (quiet, reported as "float";
               values outside float32 range fail the same way)
"""

from __future__ import annotations
import functools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, NamedTuple, Optional, Set, Tuple

import numpy as np

from ..errors import MapParseError

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
INLINE_WHITESPACE = " \t"
LINE_END_CHARS = "\n\r"


class Match(NamedTuple):
    """A successful rule application."""
    value: Any
    pos: int


Rule = Callable[[int], Optional[Match]]


def rule(func: Callable) -> Callable:
    """Mark a method as a grammar rule.

    When the owning state has tracing enabled, each attempt, match and
    failure is logged at DEBUG level.
    """
    name = func.__name__

    @functools.wraps(func)
    def wrapper(self: "ParseState", pos: int) -> Optional[Match]:
        if not self.trace:
            return func(self, pos)
        logger.debug("Attempting to match rule `%s` at %s", name, self.describe(pos))
        result = func(self, pos)
        if result is None:
            logger.debug("Failed to match rule `%s` at %s", name, self.describe(pos))
        else:
            logger.debug("Matched rule `%s` at %s to %s", name,
                         self.describe(pos), self.describe(result.pos))
        return result

    return wrapper


class ParseState:
    """Input text plus furthest-failure bookkeeping for one parse call.

    A fresh state is created per call, so separate parses share nothing.
    """

    def __init__(self, text: str, trace: bool = False):
        self.text = text
        self.trace = trace
        self.max_err_pos = 0
        self.expected: Set[str] = set()
        self._quiet = 0

    # ---------------------------------------------------------------
    # Failure tracking
    # ---------------------------------------------------------------

    def mark_failure(self, pos: int, expected: str) -> None:
        if self._quiet:
            return
        if pos > self.max_err_pos:
            self.max_err_pos = pos
            self.expected = {expected}
        elif pos == self.max_err_pos:
            self.expected.add(expected)

    @contextmanager
    def quiet(self) -> Iterator[None]:
        """Suppress failure recording for the enclosed matching."""
        self._quiet += 1
        try:
            yield
        finally:
            self._quiet -= 1

    def line_col(self, pos: int) -> Tuple[int, int]:
        """1-based (line, column) of a character offset."""
        line = self.text.count("\n", 0, pos) + 1
        line_start = self.text.rfind("\n", 0, pos) + 1
        return line, pos - line_start + 1

    def describe(self, pos: int) -> str:
        line, column = self.line_col(pos)
        return f"{line}:{column}"

    def error(self) -> MapParseError:
        line, column = self.line_col(self.max_err_pos)
        return MapParseError(line, column, self.max_err_pos, self.expected)

    # ---------------------------------------------------------------
    # Terminals
    # ---------------------------------------------------------------

    def literal(self, pos: int, token: str) -> Optional[int]:
        """Match an exact string, returning the offset after it."""
        if self.text.startswith(token, pos):
            return pos + len(token)
        self.mark_failure(pos, repr(token))
        return None

    def char_in(self, pos: int, chars: str, label: str) -> Optional[int]:
        if pos < len(self.text) and self.text[pos] in chars:
            return pos + 1
        self.mark_failure(pos, label)
        return None

    def char_not_in(self, pos: int, chars: str, label: str) -> Optional[int]:
        if pos < len(self.text) and self.text[pos] not in chars:
            return pos + 1
        self.mark_failure(pos, label)
        return None

    def repeat_char(self, pos: int, match_one: Callable[[int], Optional[int]],
                    min_count: int = 0) -> Optional[int]:
        """Greedy repetition of a single-character terminal."""
        count = 0
        while True:
            nxt = match_one(pos)
            if nxt is None:
                break
            pos = nxt
            count += 1
        return pos if count >= min_count else None

    def end_of_input(self, pos: int) -> bool:
        if pos == len(self.text):
            return True
        self.mark_failure(pos, "EOF")
        return False


class LexicalRules(ParseState):
    """Separator, comment and number rules shared by the MAP grammar."""

    @rule
    def linebreak(self, pos: int) -> Optional[Match]:
        for token in ("\n", "\r\n"):
            end = self.literal(pos, token)
            if end is not None:
                return Match(None, end)
        return None

    @rule
    def whitespace(self, pos: int) -> Optional[Match]:
        end = self.char_in(pos, INLINE_WHITESPACE, "[ \\t]")
        return None if end is None else Match(None, end)

    @rule
    def commentline(self, pos: int) -> Optional[Match]:
        end = self.literal(pos, "//")
        if end is None:
            return None
        end = self.repeat_char(end, lambda p: self.literal(p, " "))
        start = end
        end = self.repeat_char(
            end, lambda p: self.char_not_in(p, LINE_END_CHARS, "[^\\n\\r]"),
            min_count=1)
        if end is None:
            return None
        return Match(self.text[start:end], end)

    @rule
    def linesep(self, pos: int) -> Optional[Match]:
        alternatives = (self.linebreak, self.commentline, self.whitespace)
        start = pos
        while True:
            for alternative in alternatives:
                m = alternative(pos)
                if m is not None:
                    pos = m.pos
                    break
            else:
                break
        if pos == start:
            return None
        return Match(None, pos)

    @rule
    def float32(self, pos: int) -> Optional[Match]:
        with self.quiet():
            end = self._float_shape(pos)
        if end is None:
            self.mark_failure(pos, "float")
            return None
        with np.errstate(over="ignore"):
            value = np.float32(float(self.text[pos:end]))
        # out of float32 range
        if not np.isfinite(value):
            self.mark_failure(pos, "float")
            return None
        return Match(float(value), end)

    def _float_shape(self, pos: int) -> Optional[int]:
        digit = functools.partial(self.char_in, chars=DIGITS, label="[0-9]")
        after_sign = self.literal(pos, "-")
        if after_sign is not None:
            pos = after_sign
        end = self.repeat_char(pos, lambda p: digit(p), min_count=1)
        if end is None:
            return None
        after_dot = self.literal(end, ".")
        if after_dot is not None:
            end = self.repeat_char(after_dot, lambda p: digit(p))
        return end
