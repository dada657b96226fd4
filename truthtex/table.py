import dataclasses
import itertools
import logging
import typing as t

from pyrsistent import PMap, PVector, pmap, pvector

from .parser import (
    And,
    Expression,
    Iff,
    Implies,
    Not,
    Or,
    ParsedExpression,
    Variable,
    VariableOrder,
    all_variable_names,
)

logger = logging.getLogger(__name__)

# tables past this many variables get a warning, since rows grow as 2**k
LARGE_TABLE_VARIABLES = 16

Assignment: t.TypeAlias = PMap[str, bool]


class UnboundVariableError(LookupError):
    """A variable in the tree has no value in the assignment."""


@dataclasses.dataclass(frozen=True)
class TableOptions:
    show_steps: bool = True


@dataclasses.dataclass(frozen=True)
class Row:
    assignment: Assignment
    values: "PVector[bool]"


@dataclasses.dataclass(frozen=True)
class TruthTable:
    expression: Expression
    variables: VariableOrder
    columns: "PVector[Expression]"
    rows: "PVector[Row]"

    def column(self, expr: Expression) -> list[bool]:
        """
        Values of ``expr`` in row order.

        ``expr`` may be one of the selected columns or a bare variable.
        """
        if expr in self.columns:
            idx = self.columns.index(expr)
            return [row.values[idx] for row in self.rows]
        match expr:
            case Variable(name=n) if n in self.variables:
                return [row.assignment[n] for row in self.rows]
        raise KeyError(expr)

    @property
    def root_values(self) -> list[bool]:
        return self.column(self.expression)

    @property
    def is_tautology(self) -> bool:
        return all(self.root_values)

    @property
    def is_contradiction(self) -> bool:
        return not any(self.root_values)

    @property
    def is_satisfiable(self) -> bool:
        return any(self.root_values)

    @property
    def classification(self) -> str:
        if self.is_tautology:
            return "tautology"
        if self.is_contradiction:
            return "contradiction"
        return "contingent"


def evaluate(tree: Expression, assignment: Assignment) -> bool:
    match tree:
        case Variable(name=n):
            try:
                return assignment[n]
            except KeyError:
                raise UnboundVariableError(
                    f"variable {n!r} is not bound by the assignment"
                ) from None
        case Not(value=value):
            return not evaluate(value, assignment)
        case And(lhs=l, rhs=r):
            return evaluate(l, assignment) and evaluate(r, assignment)
        case Or(lhs=l, rhs=r):
            return evaluate(l, assignment) or evaluate(r, assignment)
        case Implies(lhs=l, rhs=r):
            return (not evaluate(l, assignment)) or evaluate(r, assignment)
        case Iff(lhs=l, rhs=r):
            return evaluate(l, assignment) == evaluate(r, assignment)
        case _:
            t.assert_never(tree)


def assignments(variables: VariableOrder) -> t.Iterator[Assignment]:
    """
    Every assignment over ``variables`` in increasing binary order.

    The first variable is the most significant bit, so the first assignment is
    all-false and the last is all-true.
    """
    for values in itertools.product((False, True), repeat=len(variables)):
        yield pmap(dict(zip(variables, values)))


def subexpressions(tree: Expression) -> list[Expression]:
    """
    The compound nodes of ``tree``, children before parents.

    The left subtree is listed before the right one, and a node which
    reappears elsewhere in the tree is only listed at its first occurrence.
    """
    found: list[Expression] = []

    def visit(node: Expression) -> None:
        match node:
            case Variable():
                return
            case Not(value=value):
                visit(value)
            case And(lhs=l, rhs=r) | Or(lhs=l, rhs=r) | Implies(
                lhs=l, rhs=r
            ) | Iff(lhs=l, rhs=r):
                visit(l)
                visit(r)
            case _:
                t.assert_never(node)
        if node not in found:
            found.append(node)

    visit(tree)
    return found


def select_columns(tree: Expression, options: TableOptions) -> list[Expression]:
    if options.show_steps:
        # a lone variable has no compound nodes, but still needs its column
        return subexpressions(tree) or [tree]
    return [tree]


def build_table(
    parsed: ParsedExpression, options: TableOptions = TableOptions()
) -> TruthTable:
    tree, variables = parsed.tree, parsed.variables
    missing = all_variable_names(tree).difference(variables)
    if missing:
        raise UnboundVariableError(
            f"variables {sorted(missing)} do not appear in the variable order"
        )

    if len(variables) > LARGE_TABLE_VARIABLES:
        logger.warning(
            "building a table over %d variables (%d rows)",
            len(variables),
            2 ** len(variables),
        )

    columns = select_columns(tree, options)
    rows = [
        Row(assignment, pvector(evaluate(col, assignment) for col in columns))
        for assignment in assignments(variables)
    ]
    logger.debug(
        "built table: %d variables, %d columns, %d rows",
        len(variables),
        len(columns),
        len(rows),
    )
    return TruthTable(tree, variables, pvector(columns), pvector(rows))
