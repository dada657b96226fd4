"""
Tests for truthtex/table.py evaluation and truth-table construction.
"""

import pytest
from pyrsistent import pmap

from truthtex.parser import (
    And,
    Iff,
    Implies,
    Not,
    Or,
    ParsedExpression,
    Variable,
    VariableOrder,
    parse,
)
from truthtex.table import (
    TableOptions,
    UnboundVariableError,
    assignments,
    build_table,
    evaluate,
    subexpressions,
)

A, B, C = Variable("A"), Variable("B"), Variable("C")
NO_STEPS = TableOptions(show_steps=False)


def table_of(text, options=TableOptions()):
    return build_table(parse(text), options)


class TestEvaluate:
    @pytest.mark.parametrize(
        "tree, a, b, expected",
        [
            (And(A, B), True, True, True),
            (And(A, B), True, False, False),
            (Or(A, B), False, False, False),
            (Or(A, B), False, True, True),
            (Implies(A, B), True, False, False),
            (Implies(A, B), False, False, True),
            (Iff(A, B), False, False, True),
            (Iff(A, B), True, False, False),
        ],
    )
    def test_connectives(self, tree, a, b, expected):
        assert evaluate(tree, pmap({"A": a, "B": b})) is expected

    def test_not(self):
        assert evaluate(Not(A), pmap({"A": False})) is True
        assert evaluate(Not(A), pmap({"A": True})) is False

    def test_unbound_variable(self):
        with pytest.raises(UnboundVariableError):
            evaluate(And(A, B), pmap({"A": True}))

    def test_unbound_variable_is_a_lookup_error(self):
        with pytest.raises(LookupError):
            evaluate(C, pmap({}))


class TestAssignments:
    def test_binary_counting_order(self):
        rows = [dict(a) for a in assignments(VariableOrder(["X", "Y"]))]
        assert rows == [
            {"X": False, "Y": False},
            {"X": False, "Y": True},
            {"X": True, "Y": False},
            {"X": True, "Y": True},
        ]

    def test_no_variables(self):
        assert [dict(a) for a in assignments(VariableOrder())] == [{}]


class TestBuildTable:
    def test_single_variable(self):
        table = table_of("A")
        assert len(table.rows) == 2
        assert table.column(A) == [False, True]
        assert table.root_values == [False, True]
        assert list(table.columns) == [A]

    def test_single_variable_without_steps(self):
        table = table_of("A", NO_STEPS)
        assert list(table.columns) == [A]
        assert table.root_values == [False, True]

    def test_and(self):
        table = table_of("(A * B)")
        assert len(table.rows) == 4
        assert table.root_values == [False, False, False, True]

    def test_implies(self):
        table = table_of("(A => B)")
        rows = [dict(row.assignment) for row in table.rows]
        false_rows = [r for r, v in zip(rows, table.root_values) if not v]
        assert false_rows == [{"A": True, "B": False}]

    def test_iff(self):
        table = table_of("(A <=> B)")
        for row, value in zip(table.rows, table.root_values):
            assert value == (row.assignment["A"] == row.assignment["B"])

    def test_not(self):
        table = table_of("(- A)")
        assert len(table.rows) == 2
        assert table.column(Not(A)) == [not v for v in table.column(A)]

    @pytest.mark.parametrize(
        "text, k",
        [
            ("p", 1),
            ("(p * p)", 1),
            ("(p + q)", 2),
            ("((p => q) <=> (- r))", 3),
            ("((a * b) + ((c => d) <=> (- (e * a))))", 5),
        ],
    )
    def test_row_count(self, text, k):
        table = table_of(text)
        assert len(table.rows) == 2**k
        combos = {tuple(sorted(row.assignment.items())) for row in table.rows}
        assert len(combos) == 2**k

    def test_first_variable_is_most_significant(self):
        table = table_of("(B * A)")
        assert list(table.variables) == ["B", "A"]
        assert dict(table.rows[1].assignment) == {"B": False, "A": True}
        assert dict(table.rows[2].assignment) == {"B": True, "A": False}

    def test_implies_and_iff_columns(self):
        lhs, rhs = Or(A, B), Not(C)
        table = table_of("(((A + B) => (- C)) * ((A + B) <=> (- C)))")
        implies = table.column(Implies(lhs, rhs))
        iff = table.column(Iff(lhs, rhs))
        for row, imp, eq in zip(table.rows, implies, iff):
            left = row.assignment["A"] or row.assignment["B"]
            right = not row.assignment["C"]
            assert imp == ((not left) or right)
            assert eq == (left == right)

    def test_unknown_column(self):
        table = table_of("(A * B)")
        with pytest.raises(KeyError):
            table.column(Variable("Z"))

    def test_inconsistent_variable_order(self):
        parsed = ParsedExpression(And(A, B), VariableOrder(["A"]))
        with pytest.raises(UnboundVariableError):
            build_table(parsed)


class TestSteps:
    def test_columns_children_before_parents(self):
        table = table_of("((A * B) + (- A))")
        assert list(table.columns) == [And(A, B), Not(A), Or(And(A, B), Not(A))]

    def test_without_steps_only_root(self):
        table = table_of("((A * B) + (- A))", NO_STEPS)
        assert list(table.columns) == [Or(And(A, B), Not(A))]
        assert all(len(row.values) == 1 for row in table.rows)

    def test_repeated_subexpression_listed_once(self):
        assert subexpressions(parse("((A * B) => (A * B))").tree) == [
            And(A, B),
            Implies(And(A, B), And(A, B)),
        ]

    def test_steps_and_root_agree(self):
        text = "((A => B) <=> ((- B) => (- A)))"
        assert table_of(text).root_values == table_of(text, NO_STEPS).root_values


class TestSummaries:
    def test_tautology(self):
        table = table_of("((A => B) <=> ((- B) => (- A)))")
        assert table.is_tautology
        assert table.is_satisfiable
        assert not table.is_contradiction

    def test_contradiction(self):
        table = table_of("(A * (- A))")
        assert table.is_contradiction
        assert not table.is_satisfiable
        assert not table.is_tautology

    def test_contingent(self):
        table = table_of("(A + B)")
        assert table.is_satisfiable
        assert not table.is_tautology
        assert not table.is_contradiction

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("(A + (- A))", "tautology"),
            ("(A * (- A))", "contradiction"),
            ("(A => B)", "contingent"),
        ],
    )
    def test_classification(self, text, expected):
        assert table_of(text).classification == expected
