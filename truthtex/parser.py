import dataclasses
import enum
import logging
import typing as t

from pyrsistent import PMap, PVector, pmap, pvector

logger = logging.getLogger(__name__)

# characters which can never be a variable name
RESERVED = frozenset("()-*+=<>")


@dataclasses.dataclass(frozen=True)
class Variable:
    name: str


@dataclasses.dataclass(frozen=True)
class Not:
    value: "Expression"


@dataclasses.dataclass(frozen=True)
class And:
    lhs: "Expression"
    rhs: "Expression"


@dataclasses.dataclass(frozen=True)
class Or:
    lhs: "Expression"
    rhs: "Expression"


@dataclasses.dataclass(frozen=True)
class Implies:
    lhs: "Expression"
    rhs: "Expression"


@dataclasses.dataclass(frozen=True)
class Iff:
    lhs: "Expression"
    rhs: "Expression"


Expression: t.TypeAlias = Variable | Not | And | Or | Implies | Iff
BinaryExpression: t.TypeAlias = And | Or | Implies | Iff

BINARY_OPERATORS: dict[str, type[BinaryExpression]] = {
    "*": And,
    "+": Or,
    "=>": Implies,
    "<=>": Iff,
}


class VariableOrder:
    """
    Insertion-ordered set of variable names.

    Index ``i`` is the ``i``-th distinct name in order of first appearance in
    the source text. Instances are immutable; ``add`` returns a new order.
    """

    def __init__(self, names: t.Iterable[str] = ()) -> None:
        self.names: PVector[str] = pvector()
        self.indices: PMap[str, int] = pmap()
        for name in names:
            if name not in self.indices:
                self.indices = self.indices.set(name, len(self.names))
                self.names = self.names.append(name)

    def add(self, name: str) -> "VariableOrder":
        if name in self.indices:
            return self
        order = VariableOrder()
        order.indices = self.indices.set(name, len(self.names))
        order.names = self.names.append(name)
        return order

    def index(self, name: str) -> int:
        return self.indices[name]

    def __contains__(self, name: object) -> bool:
        return name in self.indices

    def __iter__(self) -> t.Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VariableOrder):
            return NotImplemented
        return self.names == other.names

    def __hash__(self) -> int:
        return hash(self.names)

    def __repr__(self) -> str:
        return f"VariableOrder({list(self.names)!r})"


@dataclasses.dataclass(frozen=True)
class ParsedExpression:
    tree: Expression
    variables: VariableOrder


class ErrorKind(enum.Enum):
    UNEXPECTED_TOKEN = "unexpected token"
    UNBALANCED_PARENS = "unbalanced parentheses"
    UNKNOWN_OPERATOR = "unknown operator"
    EMPTY_INPUT = "empty input"


class ParseError(ValueError):
    def __init__(self, kind: ErrorKind, position: int, text: str) -> None:
        self.kind = kind
        self.position = position
        self.text = text
        super().__init__(f"parsing failed: {kind.value} at position {position}")

    def pointer(self) -> str:
        """The input line with a caret under the offending position."""
        # tabs are kept so the caret lines up however they are expanded
        padding = "".join(
            "\t" if char == "\t" else " " for char in self.text[: self.position]
        )
        return f"{self.text}\n{padding}^"


class _Parser:
    """Recursive-descent parser for fully parenthesized expressions"""

    def __init__(self, text: str) -> None:
        self.text = text
        self.variables = VariableOrder()
        self._idx = 0

        self._skip_whitespace()
        if self._done():
            raise self._error(ErrorKind.EMPTY_INPUT, 0)

        self.parsed = self._parse_expr()

        self._skip_whitespace()
        if not self._done():
            kind = (
                ErrorKind.UNBALANCED_PARENS
                if self._current_char == ")"
                else ErrorKind.UNEXPECTED_TOKEN
            )
            raise self._error(kind)

    def _error(self, kind: ErrorKind, position: int | None = None) -> ParseError:
        if position is None:
            position = self._idx
        return ParseError(kind, position, self.text)

    def _done(self) -> bool:
        return self._idx >= len(self.text)

    @property
    def _current_char(self) -> str:
        if self._done():
            # running out of input is only possible inside an open paren
            raise self._error(ErrorKind.UNBALANCED_PARENS)
        return self.text[self._idx]

    def _advance(self, count: int = 1) -> None:
        self._idx += count

    def _skip_whitespace(self) -> None:
        while not self._done() and self.text[self._idx].isspace():
            self._advance()

    def _parse_expr(self) -> Expression:
        self._skip_whitespace()
        char = self._current_char
        if char == "(":
            return self._parse_compound()
        if char in RESERVED or not char.isprintable():
            raise self._error(ErrorKind.UNEXPECTED_TOKEN)
        self._advance()
        self.variables = self.variables.add(char)
        return Variable(char)

    def _parse_compound(self) -> Expression:
        self._advance()
        self._skip_whitespace()

        ret: Expression
        if self._current_char == "-":
            self._advance()
            ret = Not(self._parse_expr())
        else:
            lhs = self._parse_expr()
            constructor = self._parse_operator()
            rhs = self._parse_expr()
            ret = constructor(lhs, rhs)

        self._skip_whitespace()
        if self._current_char != ")":
            raise self._error(ErrorKind.UNBALANCED_PARENS)
        self._advance()
        return ret

    def _parse_operator(self) -> type[BinaryExpression]:
        self._skip_whitespace()
        start = self._idx
        if self._current_char in "()":
            raise self._error(ErrorKind.UNEXPECTED_TOKEN)
        for symbol in BINARY_OPERATORS:
            if self.text.startswith(symbol, start):
                self._advance(len(symbol))
                return BINARY_OPERATORS[symbol]
        raise self._error(ErrorKind.UNKNOWN_OPERATOR, start)


def parse(text: str) -> ParsedExpression:
    parser = _Parser(text)
    logger.debug(
        "parsed %r with variables %s", text, ", ".join(parser.variables)
    )
    return ParsedExpression(parser.parsed, parser.variables)


def all_variable_names(tree: Expression) -> set[str]:
    match tree:
        case Variable(name=n):
            return {n}
        case Not(value=value):
            return all_variable_names(value)
        case And(lhs=l, rhs=r) | Or(lhs=l, rhs=r) | Implies(lhs=l, rhs=r) | Iff(
            lhs=l, rhs=r
        ):
            return all_variable_names(l) | all_variable_names(r)
        case _:
            t.assert_never(tree)
