"""LESS syntax: tokenizer, parser and syntax tree."""

from .colors import NAMED_COLORS, is_named_color, parse_hex_color, render_color
from .lexer import Token, TokenKind, tokenize
from .nodes import Node, NodeType, Operator, Stylesheet, format_number
from .parser import DEFAULT_MAX_DEPTH, LessParser, parse

__all__ = [
    "LessParser",
    "parse",
    "DEFAULT_MAX_DEPTH",
    "tokenize",
    "Token",
    "TokenKind",
    "Node",
    "NodeType",
    "Operator",
    "Stylesheet",
    "format_number",
    "NAMED_COLORS",
    "is_named_color",
    "parse_hex_color",
    "render_color",
]
