"""Syntax tree for LESS stylesheets.

Every node class carries a ``kind`` class attribute from ``NodeType``; the set
of kinds is closed and visitors dispatch on it. Nodes are plain data: the
parser builds them, the classifier only reads them.

Tree shape, top down:
    Stylesheet.block -> Block.rules -> rule-level nodes (Ruleset, Rule,
    Mixin, MixinCall, Media, BlockDirective, GenericBlock, Directive,
    Definition, Import, Extend), which hold value-level nodes.

``Block.rules`` may contain ``None`` holes where a statement was elided
(a stray ``;``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class NodeType(Enum):
    """Discriminant for every node kind. Values double as syntax-counter tags."""

    STYLESHEET = "stylesheet"
    BLOCK = "block"

    # Rule level
    RULESET = "ruleset"
    RULE = "rule"
    MIXIN = "mixin"
    MIXIN_CALL = "mixin_call"
    MEDIA = "media"
    BLOCK_DIRECTIVE = "block_directive"
    DIRECTIVE = "directive"
    GENERIC_BLOCK = "generic_block"
    DEFINITION = "definition"
    IMPORT = "import"
    EXTEND = "extend"

    # Selectors
    SELECTORS = "selectors"
    SELECTOR = "selector"
    TEXT_ELEMENT = "text_element"
    ATTRIBUTE_ELEMENT = "attribute_element"
    VALUE_ELEMENT = "value_element"

    # Mixins and guards
    MIXIN_PARAMS = "mixin_params"
    PARAMETER = "parameter"
    MIXIN_ARGS = "mixin_args"
    ARGUMENT = "argument"
    GUARD = "guard"
    CONDITION = "condition"

    # Media queries
    FEATURES = "features"
    FEATURE = "feature"

    # Values
    PROPERTY = "property"
    EXPRESSION = "expression"
    EXPRESSION_LIST = "expression_list"
    OPERATION = "operation"
    SHORTHAND = "shorthand"
    PAREN = "paren"
    NEGATIVE = "negative"
    FUNCTION_CALL = "function_call"
    ASSIGNMENT = "assignment"
    VARIABLE = "variable"
    DIMENSION = "dimension"
    KEYWORD_COLOR = "keyword_color"
    RGB_COLOR = "rgb_color"
    KEYWORD = "keyword"
    TRUE = "true"
    FALSE = "false"
    QUOTED = "quoted"
    RATIO = "ratio"
    URL = "url"
    UNICODE_RANGE = "unicode_range"


class Operator(Enum):
    """Arithmetic, logical and comparison operators."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    AND = "and"
    OR = "or"
    EQUAL = "eq"
    NOT_EQUAL = "ne"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        """Look up an operator by its source spelling (``+``, ``>=``, ``and``...)."""
        try:
            return _SYMBOLS[symbol]
        except KeyError:
            raise ValueError(f"unknown operator: {symbol!r}") from None


_SYMBOLS = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
    "and": Operator.AND,
    "or": Operator.OR,
    "=": Operator.EQUAL,
    "!=": Operator.NOT_EQUAL,
    ">": Operator.GREATER_THAN,
    ">=": Operator.GREATER_THAN_OR_EQUAL,
    "=>": Operator.GREATER_THAN_OR_EQUAL,
    "<": Operator.LESS_THAN,
    "<=": Operator.LESS_THAN_OR_EQUAL,
    "=<": Operator.LESS_THAN_OR_EQUAL,
}


def format_number(value: float) -> str:
    """Render a number the way the LESS runtime prints it: ``10``, ``0.5``, ``-2``."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


class Node:
    """Base class for all syntax tree nodes."""

    kind: ClassVar[NodeType]


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


@dataclass
class Property(Node):
    """A declaration property name, or a media feature name."""

    kind: ClassVar[NodeType] = NodeType.PROPERTY
    name: str


@dataclass
class Variable(Node):
    """A variable reference. ``name`` excludes the leading ``@``.

    ``indirect`` marks ``@@name``; ``curly`` marks ``@{name}`` interpolation.
    """

    kind: ClassVar[NodeType] = NodeType.VARIABLE
    name: str
    indirect: bool = False
    curly: bool = False


@dataclass
class Dimension(Node):
    """A number with an optional unit (``10px``, ``50%``, ``1.5``)."""

    kind: ClassVar[NodeType] = NodeType.DIMENSION
    value: float
    unit: str = ""

    @property
    def text(self) -> str:
        return format_number(self.value) + self.unit


@dataclass
class KeywordColor(Node):
    """A named color (``red``). ``keyword`` keeps the source spelling."""

    kind: ClassVar[NodeType] = NodeType.KEYWORD_COLOR
    keyword: str


@dataclass
class RGBColor(Node):
    """A color given by channels, from a hex literal in the source."""

    kind: ClassVar[NodeType] = NodeType.RGB_COLOR
    red: int
    green: int
    blue: int
    alpha: float = 1.0
    source: str = ""


@dataclass
class Keyword(Node):
    kind: ClassVar[NodeType] = NodeType.KEYWORD
    value: str


@dataclass
class TrueLiteral(Node):
    kind: ClassVar[NodeType] = NodeType.TRUE
    value: str = "true"


@dataclass
class FalseLiteral(Node):
    kind: ClassVar[NodeType] = NodeType.FALSE
    value: str = "false"


@dataclass
class Quoted(Node):
    """A string. ``escaped`` marks ``~"..."`` literals; backtick strings have quote '`'."""

    kind: ClassVar[NodeType] = NodeType.QUOTED
    value: str
    quote: str = '"'
    escaped: bool = False


@dataclass
class Ratio(Node):
    """A media-query ratio such as ``16/9``."""

    kind: ClassVar[NodeType] = NodeType.RATIO
    value: str


@dataclass
class Url(Node):
    kind: ClassVar[NodeType] = NodeType.URL
    value: str


@dataclass
class UnicodeRange(Node):
    kind: ClassVar[NodeType] = NodeType.UNICODE_RANGE
    value: str


@dataclass
class FunctionCall(Node):
    kind: ClassVar[NodeType] = NodeType.FUNCTION_CALL
    name: str
    args: list[Node] = field(default_factory=list)


@dataclass
class Assignment(Node):
    """``name=value`` inside IE filter calls, e.g. ``alpha(opacity=50)``."""

    kind: ClassVar[NodeType] = NodeType.ASSIGNMENT
    name: str
    value: Node


@dataclass
class Expression(Node):
    """Space-separated values."""

    kind: ClassVar[NodeType] = NodeType.EXPRESSION
    values: list[Node] = field(default_factory=list)


@dataclass
class ExpressionList(Node):
    """Comma-separated values."""

    kind: ClassVar[NodeType] = NodeType.EXPRESSION_LIST
    values: list[Node] = field(default_factory=list)


@dataclass
class Operation(Node):
    kind: ClassVar[NodeType] = NodeType.OPERATION
    operator: Operator
    left: Node
    right: Node


@dataclass
class Shorthand(Node):
    """Slash-separated pair in a declaration value (``12px/1.5``)."""

    kind: ClassVar[NodeType] = NodeType.SHORTHAND
    left: Node
    right: Node


@dataclass
class Paren(Node):
    kind: ClassVar[NodeType] = NodeType.PAREN
    value: Node


@dataclass
class Negative(Node):
    """Unary minus applied to a non-literal operand (``-@gutter``)."""

    kind: ClassVar[NodeType] = NodeType.NEGATIVE
    value: Node


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


@dataclass
class TextElement(Node):
    """A plain selector part: ``.nav``, ``#main``, ``a``, ``&``, ``:hover``."""

    kind: ClassVar[NodeType] = NodeType.TEXT_ELEMENT
    name: str
    combinator: Optional[str] = None


@dataclass
class AttributeElement(Node):
    """An attribute selector ``[name op value]``; parts are name, operator, value."""

    kind: ClassVar[NodeType] = NodeType.ATTRIBUTE_ELEMENT
    parts: list[Node] = field(default_factory=list)
    combinator: Optional[str] = None


@dataclass
class ValueElement(Node):
    """A selector part computed from a value: ``@{name}`` or ``~"..."``."""

    kind: ClassVar[NodeType] = NodeType.VALUE_ELEMENT
    value: Node
    combinator: Optional[str] = None


Element = Union[TextElement, AttributeElement, ValueElement]


@dataclass
class Selector(Node):
    kind: ClassVar[NodeType] = NodeType.SELECTOR
    elements: list[Element] = field(default_factory=list)


@dataclass
class Selectors(Node):
    kind: ClassVar[NodeType] = NodeType.SELECTORS
    selectors: list[Selector] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Mixins and guards
# ---------------------------------------------------------------------------


@dataclass
class Parameter(Node):
    """A mixin parameter: ``@a``, ``@a: default``, ``@rest...``, ``...`` or a literal pattern."""

    kind: ClassVar[NodeType] = NodeType.PARAMETER
    name: Optional[str] = None
    value: Optional[Node] = None
    variadic: bool = False


@dataclass
class MixinParams(Node):
    kind: ClassVar[NodeType] = NodeType.MIXIN_PARAMS
    params: list[Parameter] = field(default_factory=list)


@dataclass
class Argument(Node):
    """A mixin call argument, optionally named (``@color: red``)."""

    kind: ClassVar[NodeType] = NodeType.ARGUMENT
    value: Node
    name: Optional[str] = None


@dataclass
class MixinCallArgs(Node):
    kind: ClassVar[NodeType] = NodeType.MIXIN_ARGS
    args: list[Argument] = field(default_factory=list)
    delimiter: str = ","


@dataclass
class Condition(Node):
    """One parenthesised guard test, optionally negated with ``not``.

    ``left`` holds the test expression; comparisons inside it are
    ``Operation`` nodes, so ``(@a > 1)`` is ``Condition(Operation(GT, @a, 1))``.
    The parser never sets ``right``.
    """

    kind: ClassVar[NodeType] = NodeType.CONDITION
    left: Node
    right: Optional[Node] = None
    negate: bool = False


@dataclass
class Guard(Node):
    """``when`` clause. Conditions are comma-separated alternatives."""

    kind: ClassVar[NodeType] = NodeType.GUARD
    conditions: list[Node] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------


@dataclass
class Feature(Node):
    """A single media feature ``(name: value)``; ``value`` is None for ``(color)``."""

    kind: ClassVar[NodeType] = NodeType.FEATURE
    property: Property
    value: Optional[Node] = None


@dataclass
class Features(Node):
    """Comma-separated media queries."""

    kind: ClassVar[NodeType] = NodeType.FEATURES
    features: list[Node] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Rule level
# ---------------------------------------------------------------------------


@dataclass
class Block(Node):
    kind: ClassVar[NodeType] = NodeType.BLOCK
    rules: list[Optional[Node]] = field(default_factory=list)


@dataclass
class Stylesheet(Node):
    kind: ClassVar[NodeType] = NodeType.STYLESHEET
    block: Block = field(default_factory=Block)


@dataclass
class Rule(Node):
    """A declaration ``property: value``."""

    kind: ClassVar[NodeType] = NodeType.RULE
    property: Property
    value: Optional[Node] = None
    important: bool = False


@dataclass
class Definition(Node):
    """A variable definition ``@name: value``."""

    kind: ClassVar[NodeType] = NodeType.DEFINITION
    name: str
    value: Node
    important: bool = False


@dataclass
class Ruleset(Node):
    kind: ClassVar[NodeType] = NodeType.RULESET
    selectors: Selectors
    block: Block = field(default_factory=Block)
    guard: Optional[Guard] = None


@dataclass
class Mixin(Node):
    """A mixin definition ``.name(params) when (guard) { ... }``."""

    kind: ClassVar[NodeType] = NodeType.MIXIN
    name: str
    params: MixinParams = field(default_factory=MixinParams)
    block: Block = field(default_factory=Block)
    guard: Optional[Guard] = None


@dataclass
class MixinCall(Node):
    kind: ClassVar[NodeType] = NodeType.MIXIN_CALL
    selector: Selector
    args: Optional[MixinCallArgs] = None
    important: bool = False


@dataclass
class Media(Node):
    kind: ClassVar[NodeType] = NodeType.MEDIA
    features: Optional[Features] = None
    block: Block = field(default_factory=Block)


@dataclass
class BlockDirective(Node):
    """An at-rule with a body (``@font-face {}``). ``name`` includes the ``@``."""

    kind: ClassVar[NodeType] = NodeType.BLOCK_DIRECTIVE
    name: str
    block: Block = field(default_factory=Block)
    params: str = ""


@dataclass
class Directive(Node):
    """An at-rule without a body (``@charset "utf-8";``). ``name`` includes the ``@``."""

    kind: ClassVar[NodeType] = NodeType.DIRECTIVE
    name: str
    value: Optional[Node] = None


@dataclass
class GenericBlock(Node):
    """An anonymous block, e.g. the body of a detached ruleset ``@name: { ... }``."""

    kind: ClassVar[NodeType] = NodeType.GENERIC_BLOCK
    block: Block = field(default_factory=Block)
    name: Optional[str] = None


@dataclass
class Import(Node):
    kind: ClassVar[NodeType] = NodeType.IMPORT
    path: Node
    features: Optional[Features] = None
    options: list[str] = field(default_factory=list)


@dataclass
class Extend(Node):
    """``&:extend(selector all);``."""

    kind: ClassVar[NodeType] = NodeType.EXTEND
    selectors: Selectors
    all: bool = False
