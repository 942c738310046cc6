from .bitstring import BitString, get_bit
from .expression import CompiledExpression, Identifier, Operator
from .parser import (
    EmptyExpression,
    InvalidOperand,
    InvalidOperator,
    MissingLeftOperand,
    MissingRightOperand,
    ParseError,
    Parser,
    UnexpectedOperand,
    UnknownToken,
    UnmatchedClosingParenthesis,
    UnmatchedOpeningParenthesis,
    compile_expression,
    try_compile,
)
from .tokens import PRECEDENCE, Lexer, TokenKind, tokenize
from .truth_table import (
    TooManyVariables,
    format_truth_table,
    generate_truth_table,
    print_truth_table,
)
