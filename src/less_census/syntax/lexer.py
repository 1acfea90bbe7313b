"""Tokenizer for LESS source.

Comments are dropped; every token records whether whitespace (or a comment)
preceded it, which the parser needs for descendant combinators and for telling
``@a - 1`` (subtraction) from ``@a -1`` (two values).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import ParseError


class TokenKind(Enum):
    IDENT = "ident"
    ATKEYWORD = "atkeyword"  # @name, value excludes the '@' ("@@x" -> "@x")
    INTERP = "interp"  # @{name}, value is the name
    HASH = "hash"  # value includes the '#'
    NUMBER = "number"
    STRING = "string"  # value is the unquoted content
    URL = "url"  # value is the raw argument of url(...)
    UNICODE_RANGE = "unicode_range"
    DELIM = "delim"
    EOF = "eof"


@dataclass
class Token:
    kind: TokenKind
    value: str
    line: int
    start: int
    end: int
    ws_before: bool = False
    number: float = 0.0
    unit: str = ""
    quote: str = ""

    def is_delim(self, *chars: str) -> bool:
        return self.kind is TokenKind.DELIM and (not chars or self.value in chars)

    def is_ident(self, *words: str) -> bool:
        return self.kind is TokenKind.IDENT and (
            not words or self.value.lower() in words
        )

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.value!r}, line={self.line})"


_WS_RE = re.compile(r"\s+")
_UNICODE_RANGE_RE = re.compile(r"[uU]\+[0-9a-fA-F?]{1,6}(?:-[0-9a-fA-F]{1,6})?")
_INTERP_RE = re.compile(r"@\{([\w-]+)\}")
_ATKEYWORD_RE = re.compile(r"@@?[\w-]+")
_NUMBER_RE = re.compile(
    r"([+-]?(?:\d*\.\d+|\d+)(?:[eE][+-]?\d+)?)(%|[a-zA-Z]+)?(\\[0-9a-fA-F])?"
)
_HASH_RE = re.compile(r"#(?:[\w-]|\\.)+")
_PROGID_RE = re.compile(r"progid:[\w.]+", re.IGNORECASE)
_IDENT_RE = re.compile(r"-{0,2}(?:[a-zA-Z_\u0080-\uffff]|\\.)(?:[\w\-\u0080-\uffff]|\\.)*")
_URL_START_RE = re.compile(r"url\(", re.IGNORECASE)

# Tokens after which a leading sign binds to the number that follows.
_SIGN_CONTEXT = frozenset("(,:/*+-=<>")


class Lexer:
    """Converts LESS source text into a list of tokens ending with EOF."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        src = self.source
        n = len(src)
        ws = False

        while self.pos < n:
            ch = src[self.pos]

            m = _WS_RE.match(src, self.pos)
            if m:
                self._advance(m.end())
                ws = True
                continue

            if src.startswith("/*", self.pos):
                end = src.find("*/", self.pos + 2)
                if end < 0:
                    raise ParseError("unterminated comment", line=self.line)
                self._advance(end + 2)
                ws = True
                continue

            if src.startswith("//", self.pos):
                end = src.find("\n", self.pos)
                self._advance(n if end < 0 else end)
                ws = True
                continue

            if ch in "\"'`":
                self._string(ch, ws)
            elif _URL_START_RE.match(src, self.pos) and not self._ident_char_before():
                self._url(ws)
            elif self._match(_UNICODE_RANGE_RE, TokenKind.UNICODE_RANGE, ws):
                pass
            elif ch == "@":
                if not (
                    self._match(_INTERP_RE, TokenKind.INTERP, ws, group=1)
                    or self._match(_ATKEYWORD_RE, TokenKind.ATKEYWORD, ws, strip=1)
                ):
                    self._delim(ch, ws)
            elif self._number(ws):
                pass
            elif ch == "#":
                if not self._match(_HASH_RE, TokenKind.HASH, ws):
                    self._delim(ch, ws)
            elif self._match(_PROGID_RE, TokenKind.IDENT, ws) or self._match(
                _IDENT_RE, TokenKind.IDENT, ws
            ):
                pass
            elif src.startswith("...", self.pos):
                self._emit(TokenKind.DELIM, "...", self.pos + 3, ws)
            else:
                self._delim(ch, ws)
            ws = False

        self.tokens.append(Token(TokenKind.EOF, "", self.line, n, n, ws_before=ws))
        return self.tokens

    # ------------------------------------------------------------------

    def _advance(self, end: int) -> None:
        self.line += self.source.count("\n", self.pos, end)
        self.pos = end

    def _emit(self, kind: TokenKind, value: str, end: int, ws: bool, **extra) -> Token:
        token = Token(kind, value, self.line, self.pos, end, ws_before=ws, **extra)
        self.tokens.append(token)
        self._advance(end)
        return token

    def _delim(self, ch: str, ws: bool) -> None:
        self._emit(TokenKind.DELIM, ch, self.pos + 1, ws)

    def _match(
        self,
        pattern: re.Pattern,
        kind: TokenKind,
        ws: bool,
        group: int = 0,
        strip: int = 0,
    ) -> bool:
        m = pattern.match(self.source, self.pos)
        if not m:
            return False
        self._emit(kind, m.group(group)[strip:], m.end(), ws)
        return True

    def _ident_char_before(self) -> bool:
        if self.pos == 0:
            return False
        prev = self.source[self.pos - 1]
        return prev.isalnum() or prev in "-_"

    def _number(self, ws: bool) -> bool:
        m = _NUMBER_RE.match(self.source, self.pos)
        if not m:
            return False

        text = m.group(1)
        if text[0] in "+-" and not self._sign_binds(ws):
            return False

        unit = (m.group(2) or "") + (m.group(3) or "")
        self._emit(
            TokenKind.NUMBER,
            m.group(0),
            m.end(),
            ws,
            number=float(text),
            unit=unit,
        )
        return True

    def _sign_binds(self, ws: bool) -> bool:
        """A leading sign is part of the number unless it reads as a binary operator."""
        prev: Optional[Token] = self.tokens[-1] if self.tokens else None
        if prev is None:
            return True
        if prev.kind is TokenKind.DELIM and prev.value in _SIGN_CONTEXT:
            return True
        if prev.kind is TokenKind.DELIM and prev.value in "{};":
            return True
        return ws

    def _string(self, quote: str, ws: bool) -> None:
        src = self.source
        i = self.pos + 1
        while i < len(src):
            c = src[i]
            if c == "\\":
                i += 2
                continue
            if c == quote:
                self._emit(TokenKind.STRING, src[self.pos + 1 : i], i + 1, ws, quote=quote)
                return
            if c == "\n" and quote != "`":
                break
            i += 1
        raise ParseError("unterminated string", line=self.line)

    def _url(self, ws: bool) -> None:
        src = self.source
        i = self.pos + 4
        quote = ""
        while i < len(src):
            c = src[i]
            if c == "\\":
                i += 2
                continue
            if quote:
                if c == quote:
                    quote = ""
            elif c in "\"'":
                quote = c
            elif c == ")":
                self._emit(TokenKind.URL, src[self.pos + 4 : i].strip(), i + 1, ws)
                return
            i += 1
        raise ParseError("unterminated url()", line=self.line)


def tokenize(source: str) -> list[Token]:
    """Tokenize LESS source.

    Raises:
        ParseError: On unterminated strings, comments or ``url(``
    """
    return Lexer(source).tokenize()
