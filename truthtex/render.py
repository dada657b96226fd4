"""
LaTeX rendering for truth tables.

Each table becomes a ``tabular`` environment, one centered column per variable
followed by one per selected sub-expression, with every row ruled off.
"""

import typing as t

from .parser import And, Expression, Iff, Implies, Not, Or, Variable
from .table import TruthTable

# characters with a meaning of their own inside LaTeX math mode
LATEX_ESCAPES = {
    "&": "\\&",
    "%": "\\%",
    "$": "\\$",
    "#": "\\#",
    "_": "\\_",
    "{": "\\{",
    "}": "\\}",
    "^": "\\hat{}",
    "~": "\\sim",
    "\\": "\\backslash",
}


def latex_label(tree: Expression) -> str:
    match tree:
        case Variable(name=n):
            return LATEX_ESCAPES.get(n, n)
        case Not(value=value):
            return f"\\neg {latex_label(value)}"
        case And(lhs=l, rhs=r):
            return f"({latex_label(l)} \\wedge {latex_label(r)})"
        case Or(lhs=l, rhs=r):
            return f"({latex_label(l)} \\vee {latex_label(r)})"
        case Implies(lhs=l, rhs=r):
            return f"({latex_label(l)} \\rightarrow {latex_label(r)})"
        case Iff(lhs=l, rhs=r):
            return f"({latex_label(l)} \\iff {latex_label(r)})"
        case _:
            t.assert_never(tree)


def _cell(value: bool) -> str:
    return "T" if value else "F"


def _line(cells: t.Iterable[str]) -> str:
    return " & ".join(cells) + " \\\\\n\\hline\n"


def render_table(table: TruthTable) -> str:
    # variables already have their own column
    steps = [
        (idx, col)
        for idx, col in enumerate(table.columns)
        if not isinstance(col, Variable)
    ]
    headers = [
        *(latex_label(Variable(name)) for name in table.variables),
        *(latex_label(col) for _, col in steps),
    ]

    out = ["\\begin{tabular}{|" + "c|" * len(headers) + "}\n", "\\hline\n"]
    out.append(_line(f"${h}$" for h in headers))
    for row in table.rows:
        cells = [row.assignment[name] for name in table.variables]
        cells.extend(row.values[idx] for idx, _ in steps)
        out.append(_line(_cell(c) for c in cells))
    out.append("\\end{tabular}")
    return "".join(out)
