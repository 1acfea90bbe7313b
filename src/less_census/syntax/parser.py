"""Recursive-descent parser producing the syntax tree in ``nodes``.

The parser is purely syntactic: variables, mixins and imports are recorded as
written, never resolved or evaluated.

Statements are classified by looking ahead to the first ``{``, ``;`` or ``}``
at parenthesis depth zero:

    ... {    ruleset, mixin definition, or anonymous block
    ... ;    declaration, mixin call, or ``&:extend``
    @...     at-rules, variable definitions and detached rulesets

Sub-parses run inside a bounded token range; reading past the bound yields an
EOF token, which keeps every production from needing its own stop set.

Usage:
    parser = LessParser()
    tree = parser.parse(source, path="theme.less")
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, TypeVar, Union

from ..exceptions import NestingDepthError, ParseError
from .colors import is_named_color, parse_hex_color
from .lexer import Token, TokenKind, tokenize
from .nodes import (
    Argument,
    Assignment,
    AttributeElement,
    Block,
    BlockDirective,
    Condition,
    Definition,
    Dimension,
    Directive,
    Expression,
    ExpressionList,
    Extend,
    FalseLiteral,
    Feature,
    Features,
    FunctionCall,
    GenericBlock,
    Guard,
    Import,
    Keyword,
    KeywordColor,
    Media,
    Mixin,
    MixinCall,
    MixinCallArgs,
    MixinParams,
    Negative,
    Node,
    Operation,
    Operator,
    Parameter,
    Paren,
    Property,
    Quoted,
    Ratio,
    Rule,
    Ruleset,
    Selector,
    Selectors,
    Shorthand,
    Stylesheet,
    TextElement,
    TrueLiteral,
    UnicodeRange,
    Url,
    ValueElement,
    Variable,
)

T = TypeVar("T")

DEFAULT_MAX_DEPTH = 64

_IMPORT_RULES = frozenset({"import", "import-once", "import-multiple"})
_COMPOUND_COMPARISONS = frozenset({">=", "=>", "<=", "=<", "!="})
_ATTRIBUTE_OPERATOR_CHARS = frozenset("~|^$*=")


def _describe(tok: Token) -> str:
    if tok.kind is TokenKind.EOF:
        return "end of input"
    return repr(tok.value)


class LessParser:
    """Parses LESS source text into a ``Stylesheet``.

    Args:
        max_depth: Maximum nesting of blocks, parentheses, function calls and
            stacked unary signs. Deeper input raises ``NestingDepthError``.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def parse(self, source: str, path: Optional[Union[str, Path]] = None) -> Stylesheet:
        """Parse ``source``.

        Raises:
            ParseError: If the source is not valid LESS. The error carries
                ``path`` when one is given.
        """
        try:
            tokens = tokenize(source)
            return _Parser(tokens, source, self.max_depth).stylesheet()
        except ParseError as e:
            if path is not None:
                raise e.with_path(path) from None
            raise
        except RecursionError:
            raise ParseError("nesting too deep", filepath=path) from None


def parse(source: str, path: Optional[Union[str, Path]] = None, max_depth: int = DEFAULT_MAX_DEPTH) -> Stylesheet:
    """Parse LESS source with a one-off ``LessParser``."""
    return LessParser(max_depth).parse(source, path)


class _Parser:
    def __init__(self, tokens: list[Token], source: str, max_depth: int) -> None:
        self.tokens = tokens
        self.source = source
        self.max_depth = max_depth
        self.pos = 0
        self.depth = 0
        self._limits: list[int] = []

    # ------------------------------------------------------------------
    # Token access
    # ------------------------------------------------------------------

    def _limit(self) -> int:
        return self._limits[-1] if self._limits else len(self.tokens) - 1

    def peek(self, offset: int = 0) -> Token:
        index = self.pos + offset
        limit = self._limit()
        if index >= limit:
            return self._eof_at(limit)
        return self.tokens[index]

    def _eof_at(self, index: int) -> Token:
        tok = self.tokens[index]
        if tok.kind is TokenKind.EOF:
            return tok
        return Token(TokenKind.EOF, "", tok.line, tok.start, tok.start, ws_before=tok.ws_before)

    def next(self) -> Token:
        tok = self.peek()
        if tok.kind is not TokenKind.EOF:
            self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def error(self, reason: str, tok: Optional[Token] = None) -> ParseError:
        tok = tok or self.peek()
        return ParseError(reason, line=tok.line)

    def expect(self, char: str) -> Token:
        tok = self.peek()
        if not tok.is_delim(char):
            raise self.error(f"expected '{char}' but found {_describe(tok)}", tok)
        return self.next()

    def _text(self, start: int, end: int) -> str:
        """Source text spanned by tokens ``[start, end)``."""
        return self.source[self.tokens[start].start : self.tokens[end - 1].end].strip()

    # ------------------------------------------------------------------
    # Ranges
    # ------------------------------------------------------------------

    @contextmanager
    def _bounded(self, end: int) -> Iterator[None]:
        self._limits.append(end)
        try:
            yield
        finally:
            self._limits.pop()

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self.depth += 1
        if self.depth > self.max_depth:
            raise NestingDepthError(self.max_depth, line=self.peek().line)
        try:
            yield
        finally:
            self.depth -= 1

    def _scan(self, start: int, stops: str) -> int:
        """Index of the first depth-zero token in ``stops``, or of an unmatched closer.

        Braces listed in ``stops`` match at any depth. Returns the current
        limit when nothing matches.
        """
        depth = 0
        limit = self._limit()
        for index in range(start, limit):
            tok = self.tokens[index]
            if tok.kind is not TokenKind.DELIM or len(tok.value) != 1:
                continue
            value = tok.value
            if value in "{}":
                if value in stops:
                    return index
                continue
            if depth == 0 and value in stops:
                return index
            if value in "([":
                depth += 1
            elif value in ")]":
                if depth == 0:
                    return index
                depth -= 1
        return limit

    def _closing(self, open_index: int) -> int:
        opener = self.tokens[open_index]
        closer = ")" if opener.value == "(" else "]"
        index = self._scan(open_index + 1, closer)
        if index >= self._limit() or not self.tokens[index].is_delim(closer):
            raise self.error(f"unclosed '{opener.value}'", opener)
        return index

    def _split(self, start: int, end: int, sep: str) -> list[tuple[int, int]]:
        parts = []
        with self._bounded(end):
            begin = start
            while True:
                index = self._scan(begin, sep)
                if index >= end:
                    parts.append((begin, end))
                    return parts
                if not self.tokens[index].is_delim(sep):
                    raise self.error(f"unexpected {_describe(self.tokens[index])}", self.tokens[index])
                parts.append((begin, index))
                begin = index + 1

    def _parse_range(self, start: int, end: int, production: Callable[..., T], *args) -> T:
        self.pos = start
        with self._bounded(end):
            node = production(*args)
            if not self.at_end():
                raise self.error(f"unexpected {_describe(self.peek())}")
        self.pos = end
        return node

    def _statement_end(self) -> int:
        return self._scan(self.pos, ";{}")

    def _is_brace(self, index: int) -> bool:
        return index < self._limit() and self.tokens[index].is_delim("{")

    # ------------------------------------------------------------------
    # Blocks and statements
    # ------------------------------------------------------------------

    def stylesheet(self) -> Stylesheet:
        return Stylesheet(Block(self._rules(top=True)))

    def block(self) -> Block:
        self.expect("{")
        with self._nested():
            rules = self._rules(top=False)
        self.expect("}")
        return Block(rules)

    def _rules(self, top: bool) -> list[Optional[Node]]:
        rules: list[Optional[Node]] = []
        while True:
            tok = self.peek()
            if tok.kind is TokenKind.EOF:
                if not top:
                    raise self.error("unexpected end of input, expected '}'")
                return rules
            if tok.is_delim("}"):
                if top:
                    raise self.error("unexpected '}'")
                return rules
            if tok.is_delim(";"):
                self.next()
                rules.append(None)
                continue
            rules.append(self.statement())

    def statement(self) -> Node:
        tok = self.peek()
        if tok.kind is TokenKind.ATKEYWORD:
            return self.at_rule()

        end = self._statement_end()
        if self._is_brace(end):
            if end == self.pos:
                return GenericBlock(self.block())
            mixin = self._mixin_definition(end)
            if mixin is not None:
                return mixin
            return self.ruleset(end)

        node: Node
        if self._at_extend():
            node = self.extend()
        elif tok.is_delim(".") or tok.kind is TokenKind.HASH:
            node = self.mixin_call(end)
        else:
            node = self.rule(end)
        self._end_statement()
        return node

    def _end_statement(self) -> None:
        tok = self.peek()
        if tok.is_delim(";"):
            self.next()
        elif not (tok.is_delim("}") or tok.kind is TokenKind.EOF):
            raise self.error(f"expected ';' but found {_describe(tok)}", tok)

    def _important(self) -> bool:
        if self.peek().is_delim("!") and self.peek(1).is_ident("important"):
            self.next()
            self.next()
            return True
        return False

    # -- rulesets ------------------------------------------------------

    def ruleset(self, end: int) -> Ruleset:
        start = self.pos
        when = self._find_when(start, end)
        selectors = self._parse_range(start, end if when is None else when, self.selectors)
        guard = None
        if when is not None:
            guard = self._parse_range(when + 1, end, self.guard)
        self.pos = end
        return Ruleset(selectors, self.block(), guard)

    def _find_when(self, start: int, end: int) -> Optional[int]:
        depth = 0
        for index in range(start, end):
            tok = self.tokens[index]
            if tok.is_delim("(", "["):
                depth += 1
            elif tok.is_delim(")", "]"):
                depth -= 1
            elif depth == 0 and tok.is_ident("when") and tok.ws_before:
                return index
        return None

    def _mixin_definition(self, end: int) -> Optional[Mixin]:
        tok = self.peek()
        if tok.is_delim(".") and self.peek(1).kind is TokenKind.IDENT and not self.peek(1).ws_before:
            name, width = "." + self.peek(1).value, 2
        elif tok.kind is TokenKind.HASH:
            name, width = tok.value, 1
        else:
            return None

        open_index = self.pos + width
        if open_index >= end or not self.tokens[open_index].is_delim("("):
            return None
        close = self._closing(open_index)

        after = close + 1
        if after == end:
            when = None
        elif self.tokens[after].is_ident("when"):
            when = after
        else:
            return None

        with self._nested():
            params = self._parse_range(open_index + 1, close, self.mixin_params)
        guard = None
        if when is not None:
            guard = self._parse_range(when + 1, end, self.guard)
        self.pos = end
        return Mixin(name, params, self.block(), guard)

    # -- declarations and calls ----------------------------------------

    def rule(self, end: int) -> Rule:
        start = self.pos
        with self._bounded(end):
            colon = self._scan(start, ":")
        if colon >= end or not self.tokens[colon].is_delim(":"):
            raise self.error("expected ':' in declaration", self.tokens[start])
        if colon == start:
            raise self.error("missing property name", self.tokens[start])

        name = self._text(start, colon)
        value, important = self._parse_range(colon + 1, end, self._declaration_value)
        return Rule(Property(name), value, important)

    def _declaration_value(self) -> tuple[Optional[Node], bool]:
        end = self._limit()
        important = False
        if (
            end - self.pos >= 2
            and self.tokens[end - 2].is_delim("!")
            and self.tokens[end - 1].is_ident("important")
        ):
            important = True
            end -= 2

        value = None
        if end > self.pos:
            value = self._parse_range(self.pos, end, self.value)
        self.pos = self._limit()
        return value, important

    def mixin_call(self, end: int) -> MixinCall:
        elements: list[TextElement] = []
        args = None
        with self._bounded(end):
            combinator: Optional[str] = None
            while True:
                tok = self.peek()
                if tok.kind is TokenKind.EOF or tok.is_delim("(", "!"):
                    break
                if tok.is_delim(">"):
                    self.next()
                    combinator = ">"
                    continue
                if tok.is_delim(".") and self.peek(1).kind is TokenKind.IDENT and not self.peek(1).ws_before:
                    self.next()
                    name = "." + self.next().value
                elif tok.kind is TokenKind.HASH:
                    self.next()
                    name = tok.value
                else:
                    raise self.error(f"unexpected {_describe(tok)} in mixin call", tok)
                if combinator is None and elements and tok.ws_before:
                    combinator = " "
                elements.append(TextElement(name, combinator))
                combinator = None

            if self.peek().is_delim("("):
                close = self._closing(self.pos)
                with self._nested():
                    args = self._parse_range(self.pos + 1, close, self.mixin_args)
                self.pos = close + 1
            important = self._important()
            if not self.at_end():
                raise self.error(f"unexpected {_describe(self.peek())} after mixin call")

        if not elements:
            raise self.error("missing mixin name")
        return MixinCall(Selector(list(elements)), args, important)

    def _at_extend(self) -> bool:
        return (
            self.peek().is_delim("&")
            and self.peek(1).is_delim(":")
            and not self.peek(1).ws_before
            and self.peek(2).is_ident("extend")
            and self.peek(3).is_delim("(")
        )

    def extend(self) -> Extend:
        open_index = self.pos + 3
        close = self._closing(open_index)
        stop = close
        extend_all = False
        last = self.tokens[close - 1]
        if close - 1 > open_index + 1 and last.is_ident("all") and last.ws_before:
            extend_all = True
            stop = close - 1
        selectors = self._parse_range(open_index + 1, stop, self.selectors)
        self.pos = close + 1
        return Extend(selectors, extend_all)

    # -- mixin parameters and arguments --------------------------------

    def _delimiter(self, start: int, end: int) -> str:
        index = self._scan(start, ";")
        if index < end and self.tokens[index].is_delim(";"):
            return ";"
        return ","

    def mixin_params(self) -> MixinParams:
        start, end = self.pos, self._limit()
        params = []
        if end > start:
            delimiter = self._delimiter(start, end)
            for a, b in self._split(start, end, delimiter):
                if a < b:
                    params.append(self._parse_range(a, b, self._parameter))
        self.pos = end
        return MixinParams(params)

    def _parameter(self) -> Parameter:
        tok = self.peek()
        if tok.is_delim("..."):
            self.next()
            return Parameter(variadic=True)
        if tok.kind is TokenKind.ATKEYWORD:
            nxt = self.peek(1)
            if nxt.is_delim(":"):
                self.next()
                self.next()
                return Parameter(tok.value, self.value())
            if nxt.is_delim("..."):
                self.next()
                self.next()
                return Parameter(tok.value, variadic=True)
            if nxt.kind is TokenKind.EOF:
                self.next()
                return Parameter(tok.value)
        return Parameter(value=self.value())

    def mixin_args(self) -> MixinCallArgs:
        start, end = self.pos, self._limit()
        args = []
        delimiter = ","
        if end > start:
            delimiter = self._delimiter(start, end)
            for a, b in self._split(start, end, delimiter):
                if a < b:
                    args.append(self._parse_range(a, b, self._argument))
        self.pos = end
        return MixinCallArgs(args, delimiter)

    def _argument(self) -> Argument:
        tok = self.peek()
        if tok.kind is TokenKind.ATKEYWORD and self.peek(1).is_delim(":"):
            self.next()
            self.next()
            return Argument(self.value(), name=tok.value)
        return Argument(self.value())

    # -- guards --------------------------------------------------------

    def guard(self) -> Guard:
        start, end = self.pos, self._limit()
        if start == end:
            raise self.error("missing guard condition")
        conditions = [
            self._parse_range(a, b, self._guard_or) for a, b in self._split(start, end, ",")
        ]
        self.pos = end
        return Guard(conditions)

    def _guard_or(self) -> Node:
        node = self._guard_and()
        while self.peek().is_ident("or"):
            self.next()
            node = Operation(Operator.OR, node, self._guard_and())
        return node

    def _guard_and(self) -> Node:
        node = self._guard_term()
        while self.peek().is_ident("and"):
            self.next()
            node = Operation(Operator.AND, node, self._guard_term())
        return node

    def _guard_term(self) -> Condition:
        negate = False
        if self.peek().is_ident("not"):
            self.next()
            negate = True

        if self.peek().is_delim("("):
            close = self._closing(self.pos)
            with self._nested():
                test = self._parse_range(self.pos + 1, close, self._guard_test)
            self.pos = close + 1
            return Condition(test, negate=negate)
        return Condition(self.comparison(), negate=negate)

    def _guard_test(self) -> Node:
        tok = self.peek()
        if tok.is_ident("not"):
            return self._guard_or()
        if tok.is_delim("("):
            close = self._closing(self.pos)
            after = self.peek(close + 1 - self.pos)
            if after.kind is TokenKind.EOF or after.is_ident("and", "or"):
                return self._guard_or()
        return self.comparison()

    # -- at-rules ------------------------------------------------------

    def at_rule(self) -> Node:
        tok = self.next()
        name = tok.value
        lowered = name.lower()

        if lowered == "media":
            return self.media()
        if lowered in _IMPORT_RULES:
            node = self.import_()
            self._end_statement()
            return node

        nxt = self.peek()
        if nxt.is_delim(":"):
            detached = self.peek(1).is_delim("{")
            end = self._scan(self.pos + 1, ";{}")
            if detached or not self._is_brace(end):
                return self.definition(name)
        elif nxt.is_delim("(") and not nxt.ws_before:
            call = self._detached_call(name)
            self._end_statement()
            return call
        return self.directive(name)

    def definition(self, name: str) -> Node:
        self.expect(":")
        if self.peek().is_delim("{"):
            return GenericBlock(self.block(), name=name)

        end = self._statement_end()
        value, important = self._parse_range(self.pos, end, self._declaration_value)
        if value is None:
            raise self.error(f"missing value for @{name}")
        self._end_statement()
        return Definition(name, value, important)

    def _detached_call(self, name: str) -> MixinCall:
        close = self._closing(self.pos)
        with self._nested():
            args = self._parse_range(self.pos + 1, close, self.mixin_args)
        self.pos = close + 1
        return MixinCall(Selector([TextElement("@" + name)]), args)

    def directive(self, name: str) -> Node:
        start = self.pos
        end = self._statement_end()
        if self._is_brace(end):
            params = self._text(start, end) if end > start else ""
            self.pos = end
            return BlockDirective("@" + name, self.block(), params)

        value = None
        if end > start:
            value = self._parse_range(start, end, self.value)
        self._end_statement()
        return Directive("@" + name, value)

    def media(self) -> Media:
        start = self.pos
        end = self._statement_end()
        if not self._is_brace(end):
            raise self.error("expected '{' after @media")
        features = self._media_features(start, end) if end > start else None
        self.pos = end
        return Media(features, self.block())

    def import_(self) -> Import:
        options: list[str] = []
        if self.peek().is_delim("("):
            close = self._closing(self.pos)
            options = [
                t.value for t in self.tokens[self.pos + 1 : close] if t.kind is TokenKind.IDENT
            ]
            self.pos = close + 1

        end = self._statement_end()
        if end == self.pos:
            raise self.error("missing import path")
        features = None
        with self._bounded(end):
            path = self.primary()
            if not self.at_end():
                features = self._media_features(self.pos, end)
        self.pos = end
        return Import(path, features, options)

    # -- media queries -------------------------------------------------

    def _media_features(self, start: int, end: int) -> Features:
        return Features(
            [self._parse_range(a, b, self.media_query) for a, b in self._split(start, end, ",")]
        )

    def media_query(self) -> Node:
        items: list[Node] = []
        while not self.at_end():
            tok = self.peek()
            if tok.is_delim("("):
                items.append(self._media_feature())
            elif tok.kind is TokenKind.IDENT and not self.peek(1).is_delim("("):
                self.next()
                items.append(Keyword(tok.value))
            else:
                items.append(self.primary())
        if not items:
            raise self.error("empty media query")
        return items[0] if len(items) == 1 else Expression(items)

    def _media_feature(self) -> Node:
        open_index = self.pos
        close = self._closing(open_index)
        with self._nested():
            node = self._parse_range(open_index + 1, close, self._feature_body)
        self.pos = close + 1
        return node

    def _feature_body(self) -> Node:
        tok = self.peek()
        if tok.kind is TokenKind.IDENT and self.peek(1).is_delim(":"):
            self.next()
            self.next()
            if self.at_end():
                raise self.error(f"missing value for media feature {tok.value}")
            return Feature(Property(tok.value), self._feature_value())
        if tok.kind is TokenKind.IDENT and self.peek(1).kind is TokenKind.EOF:
            self.next()
            return Feature(Property(tok.value))
        return Paren(self.value())

    def _feature_value(self) -> Node:
        first, slash, second = self.peek(), self.peek(1), self.peek(2)
        if (
            first.kind is TokenKind.NUMBER
            and not first.unit
            and slash.is_delim("/")
            and second.kind is TokenKind.NUMBER
            and not second.unit
            and self.peek(3).kind is TokenKind.EOF
        ):
            self.pos += 3
            return Ratio(f"{first.value}/{second.value}")
        return self.value()

    # -- selectors -----------------------------------------------------

    def selectors(self) -> Selectors:
        start, end = self.pos, self._limit()
        if start == end:
            raise self.error("missing selector")
        items = [self._parse_range(a, b, self.selector) for a, b in self._split(start, end, ",")]
        self.pos = end
        return Selectors(items)

    def selector(self) -> Selector:
        elements = []
        combinator: Optional[str] = None
        while not self.at_end():
            tok = self.peek()
            if tok.is_delim(">", "+") or (
                tok.is_delim("~") and self.peek(1).kind is not TokenKind.STRING
            ):
                self.next()
                combinator = tok.value
                continue
            element = self._element()
            if combinator is None and elements and tok.ws_before:
                combinator = " "
            element.combinator = combinator
            elements.append(element)
            combinator = None
        if not elements:
            raise self.error("empty selector")
        return Selector(elements)

    def _element(self) -> Union[TextElement, AttributeElement, ValueElement]:
        tok = self.next()
        nxt = self.peek()

        if tok.is_delim(".", "#") and not nxt.ws_before:
            if tok.value == "." and nxt.kind is TokenKind.IDENT:
                self.next()
                return TextElement("." + nxt.value)
            if nxt.kind is TokenKind.INTERP:
                self.next()
                return ValueElement(Variable(nxt.value, curly=True))
        if tok.kind in (TokenKind.HASH, TokenKind.IDENT, TokenKind.NUMBER) or tok.is_delim("&", "*"):
            return TextElement(tok.value)
        if tok.kind is TokenKind.INTERP:
            return ValueElement(Variable(tok.value, curly=True))
        if tok.is_delim(":"):
            return self._pseudo()
        if tok.is_delim("["):
            return self._attribute()
        if tok.is_delim("~") and nxt.kind is TokenKind.STRING:
            self.next()
            return ValueElement(Quoted(nxt.value, nxt.quote, escaped=True))
        raise self.error(f"unexpected {_describe(tok)} in selector", tok)

    def _pseudo(self) -> TextElement:
        start = self.pos - 1
        if self.peek().is_delim(":") and not self.peek().ws_before:
            self.next()
        name = self.peek()
        if name.ws_before or name.kind not in (TokenKind.IDENT, TokenKind.INTERP):
            raise self.error("expected pseudo-class name", name)
        self.next()
        if self.peek().is_delim("(") and not self.peek().ws_before:
            self.pos = self._closing(self.pos) + 1
        return TextElement(self._text(start, self.pos))

    def _attribute(self) -> AttributeElement:
        open_index = self.pos - 1
        close = self._closing(open_index)
        parts = self._parse_range(open_index + 1, close, self._attribute_parts)
        self.pos = close + 1
        return AttributeElement(parts)

    def _attribute_parts(self) -> list[Node]:
        tok = self.next()
        parts: list[Node]
        if tok.kind is TokenKind.IDENT:
            parts = [Keyword(tok.value)]
        elif tok.kind is TokenKind.INTERP:
            parts = [Variable(tok.value, curly=True)]
        else:
            raise self.error("expected attribute name", tok)
        if self.at_end():
            return parts

        op_start = self.pos
        while self.peek().kind is TokenKind.DELIM and self.peek().value in _ATTRIBUTE_OPERATOR_CHARS:
            self.next()
        if self.pos == op_start:
            raise self.error("expected attribute operator")
        parts.append(Keyword(self._text(op_start, self.pos)))

        value = self.next()
        if value.kind is TokenKind.STRING:
            parts.append(Quoted(value.value, value.quote))
        elif value.kind is TokenKind.IDENT:
            parts.append(Keyword(value.value))
        elif value.kind is TokenKind.INTERP:
            parts.append(Variable(value.value, curly=True))
        elif value.kind is TokenKind.NUMBER:
            parts.append(Dimension(value.number, value.unit))
        else:
            raise self.error("expected attribute value", value)

        # case-sensitivity flag: [type="a" i]
        if self.peek().is_ident("i", "s"):
            self.next()
        return parts

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def value(self, in_paren: bool = False) -> Node:
        """Comma-separated list of space-separated expressions."""
        items = [self.expression(in_paren)]
        while self.peek().is_delim(","):
            self.next()
            items.append(self.expression(in_paren))
        return items[0] if len(items) == 1 else ExpressionList(items)

    def expression(self, in_paren: bool = False) -> Node:
        items = []
        while True:
            tok = self.peek()
            if tok.kind is TokenKind.EOF or tok.is_delim(","):
                break
            items.append(self.comparison() if in_paren else self.shorthand())
        if not items:
            raise self.error("expected a value")
        return items[0] if len(items) == 1 else Expression(items)

    def shorthand(self) -> Node:
        node = self.additive(in_paren=False)
        while self.peek().is_delim("/"):
            self.next()
            node = Shorthand(node, self.additive(in_paren=False))
        return node

    def comparison(self) -> Node:
        node = self.additive(in_paren=True)
        op = self._comparison_operator()
        if op is not None:
            node = Operation(op, node, self.additive(in_paren=True))
        return node

    def _comparison_operator(self) -> Optional[Operator]:
        tok = self.peek()
        if not tok.is_delim(">", "<", "=", "!"):
            return None
        nxt = self.peek(1)
        pair = tok.value + nxt.value
        if nxt.kind is TokenKind.DELIM and not nxt.ws_before and pair in _COMPOUND_COMPARISONS:
            self.next()
            self.next()
            return Operator.from_symbol(pair)
        if tok.value == "!":
            return None
        self.next()
        return Operator.from_symbol(tok.value)

    def additive(self, in_paren: bool) -> Node:
        node = self.multiplicative(in_paren)
        while True:
            tok = self.peek()
            if not tok.is_delim("+", "-"):
                return node
            # "1px -@a" is two values, "1px - @a" and "1px-@a" are subtraction
            if tok.ws_before and not self.peek(1).ws_before:
                return node
            self.next()
            node = Operation(Operator.from_symbol(tok.value), node, self.multiplicative(in_paren))

    def multiplicative(self, in_paren: bool) -> Node:
        node = self.unary()
        while True:
            tok = self.peek()
            if not (tok.is_delim("*") or (in_paren and tok.is_delim("/"))):
                return node
            self.next()
            node = Operation(Operator.from_symbol(tok.value), node, self.unary())

    def unary(self) -> Node:
        tok = self.peek()
        if tok.is_delim("-"):
            self.next()
            with self._nested():
                return Negative(self.unary())
        if tok.is_delim("+"):
            self.next()
            with self._nested():
                return self.unary()
        return self.primary()

    def primary(self) -> Node:
        tok = self.peek()
        kind = tok.kind

        if kind is TokenKind.NUMBER:
            self.next()
            return Dimension(tok.number, tok.unit)
        if kind is TokenKind.STRING:
            self.next()
            return Quoted(tok.value, tok.quote)
        if kind is TokenKind.URL:
            self.next()
            return Url(tok.value)
        if kind is TokenKind.UNICODE_RANGE:
            self.next()
            return UnicodeRange(tok.value)
        if kind is TokenKind.ATKEYWORD:
            self.next()
            if tok.value.startswith("@"):
                return Variable(tok.value[1:], indirect=True)
            return Variable(tok.value)
        if kind is TokenKind.INTERP:
            self.next()
            return Variable(tok.value, curly=True)
        if kind is TokenKind.HASH:
            self.next()
            color = parse_hex_color(tok.value)
            return color if color is not None else Keyword(tok.value)
        if kind is TokenKind.IDENT:
            return self._ident()

        if tok.is_delim("("):
            close = self._closing(self.pos)
            with self._nested():
                inner = self._parse_range(self.pos + 1, close, self.value, True)
            self.pos = close + 1
            return Paren(inner)
        if tok.is_delim("~") and self.peek(1).kind is TokenKind.STRING:
            self.next()
            string = self.next()
            return Quoted(string.value, string.quote, escaped=True)
        if tok.is_delim("%") and self.peek(1).is_delim("(") and not self.peek(1).ws_before:
            self.next()
            return self._function_call("%")
        if tok.is_delim("["):
            # CSS grid line names: [full-start]
            close = self._closing(self.pos)
            text = self._text(self.pos, close + 1)
            self.pos = close + 1
            return Keyword(text)

        raise self.error(f"unexpected {_describe(tok)}", tok)

    def _ident(self) -> Node:
        tok = self.next()
        nxt = self.peek()
        if nxt.is_delim("(") and not nxt.ws_before:
            return self._function_call(tok.value)

        lowered = tok.value.lower()
        if lowered == "true":
            return TrueLiteral(tok.value)
        if lowered == "false":
            return FalseLiteral(tok.value)
        if is_named_color(tok.value):
            return KeywordColor(tok.value)
        return Keyword(tok.value)

    def _function_call(self, name: str) -> FunctionCall:
        open_index = self.pos
        close = self._closing(open_index)
        args: list[Node] = []
        with self._nested():
            if close > open_index + 1:
                for a, b in self._split(open_index + 1, close, ","):
                    args.append(self._parse_range(a, b, self._function_arg))
        self.pos = close + 1
        return FunctionCall(name, args)

    def _function_arg(self) -> Node:
        tok = self.peek()
        if (
            tok.kind is TokenKind.IDENT
            and self.peek(1).is_delim("=")
            and not self.peek(2).is_delim("=")
        ):
            self.next()
            self.next()
            return Assignment(tok.value, self.expression(in_paren=True))
        return self.expression(in_paren=True)
