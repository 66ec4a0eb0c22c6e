"""Command expressions: tokens and a tree of elements, sequences and choices.

An expression lists element ids in order. ``[ a | b ]`` marks an optional
choice (zero or one alternative) and ``{ a | b }`` a required choice
(exactly one alternative). Characters other than digits, brackets, braces,
pipes, spaces and tabs are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

_UINT32_MASK = 0xFFFFFFFF


class TokenKind(Enum):
    """Kinds of token in a command expression."""

    NUMBER = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LBRACE = auto()
    RBRACE = auto()
    PIPE = auto()
    END = auto()


@dataclass(frozen=True)
class Token:
    """A token; ``value`` holds the element id of a NUMBER token."""

    kind: TokenKind
    value: int = 0


class NodeKind(Enum):
    """Kinds of node in a parsed expression."""

    ELEMENT = auto()
    SEQUENCE = auto()
    OPTIONAL = auto()
    REQUIRED = auto()


@dataclass
class ExprNode:
    """A parsed expression node.

    ELEMENT nodes carry an ``element_id``; the other kinds carry children:
    the items of a sequence, or the alternatives of a choice.
    """

    kind: NodeKind
    element_id: int = 0
    children: list[ExprNode] = field(default_factory=list)


_PUNCTUATION = {
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "|": TokenKind.PIPE,
}


def tokenize(expression: str) -> list[Token]:
    """Split an expression into tokens, always ending with an END token.

    Numbers wrap as unsigned 32-bit values.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(expression)
    while pos < length:
        char = expression[pos]
        kind = _PUNCTUATION.get(char)
        if kind is not None:
            tokens.append(Token(kind))
            pos += 1
        elif "0" <= char <= "9":
            value = 0
            while pos < length and "0" <= expression[pos] <= "9":
                value = (value * 10 + ord(expression[pos]) - ord("0")) & _UINT32_MASK
                pos += 1
            tokens.append(Token(TokenKind.NUMBER, value))
        else:
            pos += 1
    tokens.append(Token(TokenKind.END))
    return tokens


class _Parser:
    def __init__(self, expression: str) -> None:
        self._tokens = tokenize(expression)
        self._pos = 0

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.kind is not TokenKind.END:
            self._pos += 1
        return token

    def sequence(self) -> ExprNode | None:
        items: list[ExprNode] = []
        while True:
            token = self._peek()
            if token.kind is TokenKind.NUMBER:
                self._advance()
                items.append(ExprNode(NodeKind.ELEMENT, element_id=token.value))
            elif token.kind is TokenKind.LBRACKET:
                self._advance()
                items.append(self._alternatives(NodeKind.OPTIONAL, TokenKind.RBRACKET))
            elif token.kind is TokenKind.LBRACE:
                self._advance()
                items.append(self._alternatives(NodeKind.REQUIRED, TokenKind.RBRACE))
            else:
                break
        if not items:
            return None
        if len(items) == 1:
            return items[0]
        return ExprNode(NodeKind.SEQUENCE, children=items)

    def _alternatives(self, kind: NodeKind, closing: TokenKind) -> ExprNode:
        group = ExprNode(kind)
        alternative = self.sequence()
        if alternative is not None:
            group.children.append(alternative)
        while self._peek().kind is TokenKind.PIPE:
            self._advance()
            alternative = self.sequence()
            if alternative is not None:
                group.children.append(alternative)
        # A missing closing token is tolerated.
        if self._peek().kind is closing:
            self._advance()
        return group


def parse_expression(expression: str) -> ExprNode | None:
    """Parse an expression into a tree; None if it holds no items.

    A sequence of one item is returned as that item. Parsing stops at the
    first token that cannot start an item, such as a stray closing bracket.
    """
    return _Parser(expression).sequence()