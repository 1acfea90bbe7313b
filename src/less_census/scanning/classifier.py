"""Classifier: walks a parsed stylesheet and buckets every node into counters.

Two walks, both depth-first pre-order:

- ``scan_block`` iterates the rule-level entries of a block (stylesheet body,
  ruleset body, mixin body, media body, directive body). Block nesting is
  bounded by the parser's ``max_depth``.
- ``scan_node`` handles one value-level node and its subtree with an explicit
  stack.

Each node kind is handled by a ``_scan_<kind>`` method looked up from
``node.kind``; kinds without a handler (e.g. ``extend``) are skipped.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..logging_config import get_logger
from ..syntax.colors import render_color
from ..syntax.nodes import (
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
    FalseLiteral,
    Feature,
    Features,
    FunctionCall,
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
    NodeType,
    Operation,
    Parameter,
    Paren,
    Property,
    Quoted,
    Ratio,
    RGBColor,
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
from .counters import CounterStore

logger = get_logger(__name__)

# Rule-level statements that are only classified when scan_statements is on
_STATEMENT_KINDS = frozenset({NodeType.DEFINITION, NodeType.IMPORT, NodeType.DIRECTIVE})


class Classifier:
    """Accumulates syntax statistics for any number of stylesheets.

    Args:
        store: Counter store to populate. A fresh one is created if omitted;
            the classifier owns it exclusively until ``snapshot``.
        scan_statements: Also classify rule-level variable definitions,
            imports and body-less directives, which are skipped by default.

    Example:
        >>> classifier = Classifier()
        >>> classifier.scan(LessParser().parse("a { color: red; }"))
        >>> classifier.store["keywords"]["red"]
        1
    """

    def __init__(self, store: Optional[CounterStore] = None, scan_statements: bool = False):
        self.store = store if store is not None else CounterStore()
        self.scan_statements = scan_statements
        self.files_scanned = 0

    def scan(self, tree: Stylesheet) -> None:
        """Classify one parsed stylesheet."""
        self.scan_block(tree.block)
        self.files_scanned += 1

    def snapshot(self) -> CounterStore:
        """Frozen copy of everything counted so far."""
        return self.store.copy().freeze()

    # ------------------------------------------------------------------
    # Counter helpers
    # ------------------------------------------------------------------

    def _count(self, section: str, key: str) -> None:
        self.store.incr(section, key)

    def _tag(self, tag: str) -> None:
        self.store.incr("syntax", tag)

    # ------------------------------------------------------------------
    # Block traversal
    # ------------------------------------------------------------------

    def scan_block(self, block: Block) -> None:
        for node in block.rules:
            if node is None:
                continue
            kind = node.kind

            if kind is NodeType.MIXIN_CALL or kind is NodeType.RULE:
                self.scan_node(node)
                self._tag(kind.value)
            elif kind is NodeType.BLOCK_DIRECTIVE:
                self._block_directive(node)
            elif kind is NodeType.GENERIC_BLOCK:
                self._tag("generic_block")
                self.scan_block(node.block)
            elif kind is NodeType.MEDIA:
                self._media(node)
            elif kind is NodeType.MIXIN:
                self._mixin(node)
            elif kind is NodeType.RULESET:
                self._ruleset(node)
            elif self.scan_statements and kind in _STATEMENT_KINDS:
                self.scan_node(node)

    def _block_directive(self, node: BlockDirective) -> None:
        self._tag("block_directive")
        self._count("directives", node.name)
        self.scan_block(node.block)

    def _media(self, node: Media) -> None:
        self._tag("media")
        if node.features is not None:
            self.scan_node(node.features)
        self.scan_block(node.block)

    def _mixin(self, node: Mixin) -> None:
        self._tag("mixin")
        self.scan_node(node.guard)
        self.scan_node(node.params)
        self.scan_block(node.block)

    def _ruleset(self, node: Ruleset) -> None:
        self._tag("ruleset")
        self.scan_node(node.selectors)
        self.scan_block(node.block)

    # ------------------------------------------------------------------
    # Node traversal
    # ------------------------------------------------------------------

    def scan_node(self, node: Optional[Node]) -> None:
        """Classify ``node`` and everything below it, pre-order.

        Walks an explicit stack: operator chains such as ``1 + 1 + ... + 1``
        nest one node per operator and are not bounded by ``max_depth``.
        Each handler counts its own node and returns the children to visit.
        """
        stack: list[Optional[Node]] = [node]
        while stack:
            current = stack.pop()
            if current is None:
                continue
            handler: Optional[Callable[[Node], Optional[Sequence[Optional[Node]]]]] = getattr(
                self, f"_scan_{current.kind.value}", None
            )
            if handler is None:
                logger.debug(f"No handler for node kind '{current.kind.value}'")
                continue
            children = handler(current)
            if children:
                stack.extend(reversed(children))

    # Wrappers around a single value

    def _scan_argument(self, node: Argument):
        self._tag("argument")
        return (node.value,)

    def _scan_assignment(self, node: Assignment):
        self._tag("assignment")
        return (node.value,)

    def _scan_definition(self, node: Definition):
        self._tag("definition")
        return (node.value,)

    def _scan_directive(self, node: Directive):
        self._tag("directive")
        return (node.value,)

    def _scan_parameter(self, node: Parameter):
        self._tag("parameter")
        return (node.value,)

    def _scan_paren(self, node: Paren):
        self._tag("paren")
        return (node.value,)

    def _scan_negative(self, node: Negative):
        self._tag("negative")
        return (node.value,)

    # Colors

    def _scan_keyword_color(self, node: KeywordColor) -> None:
        self._tag("keyword_color")
        self._count("keywords", node.keyword)
        self._count("color_keywords", node.keyword)

    def _scan_rgb_color(self, node: RGBColor) -> None:
        self._tag("rgb_color")
        self._count("colors", render_color(node))

    # Guards

    def _scan_condition(self, node: Condition):
        self._tag("condition")
        return (node.left, node.right)

    def _scan_guard(self, node: Guard):
        self._tag("guard")
        return node.conditions

    # Literals

    def _scan_dimension(self, node: Dimension) -> None:
        self._tag("dimension" if node.unit else "number")
        self._count("dimensions", node.text)

    def _scan_keyword(self, node: Keyword) -> None:
        self._tag("keyword")
        self._count("keywords", node.value)

    def _scan_true(self, node: TrueLiteral) -> None:
        self._tag("keyword")
        self._count("keywords", node.value)

    def _scan_false(self, node: FalseLiteral) -> None:
        self._tag("keyword")
        self._count("keywords", node.value)

    def _scan_quoted(self, node: Quoted) -> None:
        self._tag("quoted")

    def _scan_ratio(self, node: Ratio) -> None:
        self._tag("ratio")
        self._count("ratios", node.value)

    def _scan_unicode_range(self, node: UnicodeRange) -> None:
        self._tag("unicode_range")

    def _scan_url(self, node: Url) -> None:
        self._tag("url")

    def _scan_variable(self, node: Variable) -> None:
        self._tag("variable")
        self._count("variables", node.name)

    def _scan_property(self, node: Property) -> None:
        self._tag("property")
        self._count("properties", node.name)

    # Selector elements; each node has exactly one shape

    def _scan_attribute_element(self, node: AttributeElement):
        self._tag("attribute_element")
        return node.parts

    def _scan_value_element(self, node: ValueElement):
        self._tag("value_element")
        return (node.value,)

    def _scan_text_element(self, node: TextElement) -> None:
        self._tag("text_element")
        self._count("elements", node.name)

    def _scan_selector(self, node: Selector):
        self._tag("selector")
        return node.elements

    def _scan_selectors(self, node: Selectors):
        self._tag("selectors")
        return node.selectors

    # Compound values

    def _scan_expression(self, node: Expression):
        self._tag("expression")
        return node.values

    def _scan_expression_list(self, node: ExpressionList):
        self._tag("expression_list")
        return node.values

    def _scan_function_call(self, node: FunctionCall):
        self._tag("function_call")
        self._count("functions", node.name)
        return node.args

    def _scan_operation(self, node: Operation):
        self._tag(f"operation_{node.operator.value}")
        return (node.left, node.right)

    def _scan_shorthand(self, node: Shorthand):
        self._tag("shorthand")
        return (node.left, node.right)

    # Media queries and imports

    def _scan_feature(self, node: Feature):
        self._tag("feature")
        self._count("properties", node.property.name)
        return (node.value,)

    def _scan_features(self, node: Features):
        self._tag("features")
        return node.features

    def _scan_import(self, node: Import):
        self._tag("import")
        return (node.features, node.path)

    # Mixins and declarations

    def _scan_mixin_args(self, node: MixinCallArgs):
        self._tag("mixin_args")
        return node.args

    def _scan_mixin_params(self, node: MixinParams):
        self._tag("mixin_params")
        return node.params

    def _scan_mixin_call(self, node: MixinCall):
        self._tag("mixin_call")
        return (node.args, node.selector)

    def _scan_rule(self, node: Rule):
        self._tag("rule")
        return (node.property, node.value)
