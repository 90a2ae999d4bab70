"""Parser for the pattern mini-language.

Grammar:

    expr   := term ('|' term)*
    term   := factor ('.' factor)*
    factor := atom '+'*
    atom   := NAME | '(' expr ')'

Names are Python identifiers (Unicode letters included). Whitespace between
tokens is ignored and `x++` means the same as `x+`.

Usage:
    from graph_cloner.pattern.compile_pattern import compile_pattern

    pattern = compile_pattern("department+.(boss|employees).address")
"""

from __future__ import annotations

import functools
import re
from typing import NamedTuple

from graph_cloner.errors import PatternSyntaxError
from graph_cloner.pattern.Pattern import (
    Alternation,
    Group,
    Name,
    Pattern,
    Repetition,
    Sequence,
)
from graph_cloner.util.logging_config import get_logger

logger = get_logger("pattern")

_TOKEN = re.compile(r"\s*(?:(?P<name>[^\W\d]\w*)|(?P<op>[.|()+])|(?P<end>$))")


class _Token(NamedTuple):
    kind: str  # "name", "op" or "end"
    text: str
    position: int


def _tokenize(source: str) -> list[_Token]:
    tokens: list[_Token] = []
    position = 0
    while True:
        match = _TOKEN.match(source, position)
        if match is None:
            bad = len(source) - len(source[position:].lstrip())
            raise PatternSyntaxError(source, bad, f"unexpected character {source[bad]!r}")
        kind = match.lastgroup
        assert kind is not None
        tokens.append(_Token(kind, match.group(kind), match.start(kind)))
        if kind == "end":
            return tokens
        position = match.end()


class _Parser:
    """Recursive descent over the token list, one method per grammar rule."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens = _tokenize(source)
        self.index = 0

    @property
    def current(self) -> _Token:
        return self.tokens[self.index]

    def _accept(self, op: str) -> bool:
        if self.current.kind == "op" and self.current.text == op:
            self.index += 1
            return True
        return False

    def _fail(self, reason: str) -> PatternSyntaxError:
        return PatternSyntaxError(self.source, self.current.position, reason)

    def parse(self) -> Pattern:
        if self.current.kind == "end":
            raise self._fail("empty pattern")
        expr = self._expr()
        if self.current.kind != "end":
            if self.current.text == ")":
                raise self._fail("unbalanced ')'")
            raise self._fail(f"unexpected {self.current.text!r}")
        return expr

    def _expr(self) -> Pattern:
        branches = [self._term()]
        while self._accept("|"):
            branches.append(self._term())
        return branches[0] if len(branches) == 1 else Alternation(tuple(branches))

    def _term(self) -> Pattern:
        steps = [self._factor()]
        while self._accept("."):
            steps.append(self._factor())
        return steps[0] if len(steps) == 1 else Sequence(tuple(steps))

    def _factor(self) -> Pattern:
        atom = self._atom()
        if self._accept("+"):
            while self._accept("+"):
                pass
            return Repetition(atom)
        return atom

    def _atom(self) -> Pattern:
        token = self.current
        if token.kind == "name":
            self.index += 1
            return Name(token.text)
        if self._accept("("):
            if self.current.kind == "op" and self.current.text == ")":
                raise self._fail("empty group")
            inner = self._expr()
            if not self._accept(")"):
                raise self._fail("unbalanced '(': expected ')'")
            return Group(inner)
        if token.kind == "end":
            raise self._fail("pattern ends where a name was expected")
        raise self._fail(f"expected a name or '(' but found {token.text!r}")


@functools.cache
def compile_pattern(source: str) -> Pattern:
    """Compile a pattern string, reusing the result for identical strings.

    The cache is process-wide and never evicts; it is bounded by the number of
    distinct patterns the process uses. Failed compilations are not cached.

    Raises:
        PatternSyntaxError: If `source` is not a valid pattern.
    """
    pattern = _Parser(source).parse()
    logger.debug("compiled pattern %r as %s", source, pattern)
    return pattern
