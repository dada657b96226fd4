from .parser import (
    And,
    ErrorKind,
    Expression,
    Iff,
    Implies,
    Not,
    Or,
    ParsedExpression,
    ParseError,
    Variable,
    VariableOrder,
    parse,
)
from .render import latex_label, render_table
from .table import (
    TableOptions,
    TruthTable,
    UnboundVariableError,
    build_table,
    evaluate,
)

__all__ = (
    "And",
    "ErrorKind",
    "Expression",
    "Iff",
    "Implies",
    "Not",
    "Or",
    "ParsedExpression",
    "ParseError",
    "Variable",
    "VariableOrder",
    "parse",
    "latex_label",
    "render_table",
    "TableOptions",
    "TruthTable",
    "UnboundVariableError",
    "build_table",
    "evaluate",
)
