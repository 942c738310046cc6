import logging
import sys

from .diagnostics import format_diagnostic
from .expression import CompiledExpression, Identifier, Operator
from .tokens import (
    PRECEDENCE,
    TOKENS,
    IToken,
    Lexer,
    TokenKind,
    WhitespaceToken,
    is_binary_operator,
    is_operator,
)

log = logging.getLogger(__name__)

###########
# Parsing #
###########

# A shunting yard parser with one token of lookahead
# Every token checks the token right after it, so a malformed expression is
# rejected at the first offending token and the output is always valid postfix


class ParseError(Exception):
    default = "Unable to parse expression"

    def __init__(self, err, start, end):
        super().__init__(err, start, end)
        self.err = err
        self.start = start
        self.end = end

    @classmethod
    def at(cls, token, err=None):
        return cls(err or cls.default, token.start, token.end)

    @property
    def span(self):
        return self.start, self.end

    def __str__(self):
        return f"@[{self.start}, {self.end}]: {self.err}"


class UnknownToken(ParseError):
    default = "Unknown token"


class UnmatchedOpeningParenthesis(ParseError):
    default = "Unmatched opening parenthesis"


class UnmatchedClosingParenthesis(ParseError):
    default = "Unmatched closing parenthesis"


class MissingLeftOperand(ParseError):
    default = "Missing left hand side operand"


class MissingRightOperand(ParseError):
    default = "Right hand side operand of expression is missing"


class InvalidOperand(ParseError):
    default = "Invalid operand"


class InvalidOperator(ParseError):
    default = "Invalid operator"


class UnexpectedOperand(ParseError):
    default = "Expected binary operator or right parenthesis"


class EmptyExpression(ParseError):
    default = "Empty expression"


# Tokens that may not directly follow a token of the given kind
# Kept as explicit sets, they are not symmetric
FORBIDDEN_AFTER_IDENT = frozenset((TokenKind.IDENT, TokenKind.LPAREN, TokenKind.NOT))
FORBIDDEN_AFTER_RPAREN = frozenset((TokenKind.IDENT, TokenKind.NOT, TokenKind.LPAREN))


class TokenStream:
    """
    Iterator over lexer tokens that can look one token ahead

    Fails with UnknownToken as soon as an ERROR token is consumed
    """

    _exhausted = object()

    def __init__(self, tokens):
        self._tokens = iter(tokens)
        self._next = next(self._tokens, self._exhausted)

    def __iter__(self):
        return self

    def __next__(self):
        token = self._next
        if token is self._exhausted:
            raise StopIteration
        if token.kind is TokenKind.ERROR:
            raise UnknownToken.at(token)
        self._next = next(self._tokens, self._exhausted)
        return token

    def peek(self):
        if self._next is self._exhausted:
            return None
        return self._next


def _kind(token):
    return None if token is None else token.kind


class Parser:
    def __init__(self, tokens=None):
        tokens = tokens or TOKENS
        for token in tokens:
            if not issubclass(token, IToken):
                raise TypeError(f"{token!r} is not a token")
            if issubclass(token, WhitespaceToken):
                continue
            if token.kind is None:
                raise TypeError(f"class '{token.__name__}' has no token kind")
        self.tokens = tokens

    @staticmethod
    def should_pop_op(stack, op):
        # NOT is pushed as is, it binds to whatever follows it
        if op.kind is TokenKind.NOT:
            return False
        if not stack:
            return False

        top_op = stack[-1]

        if top_op.kind is TokenKind.LPAREN:
            return False

        # Equal precedence pops too, which makes binary operators left associative
        return PRECEDENCE[top_op.kind] <= PRECEDENCE[op.kind]

    def tokenize(self, string):
        return Lexer(string, self.tokens)

    def parse_to_rpn(self, tokens):
        """
        Returns (variables, postfix) or raises a ParseError
        """
        stream = TokenStream(tokens)

        # Used to determine state
        last_token = None

        identifiers = {}
        output = []
        operator_stack = []

        for token in stream:
            next_token = stream.peek()
            next_kind = _kind(next_token)

            if token.kind is TokenKind.IDENT:
                id = identifiers.setdefault(token.value, len(identifiers))
                output.append(Identifier(id))

                if next_kind in FORBIDDEN_AFTER_IDENT:
                    raise UnexpectedOperand.at(next_token)

            elif token.kind is TokenKind.LPAREN:
                operator_stack.append(token)

                if is_binary_operator(next_kind):
                    raise InvalidOperator.at(next_token)
                if next_kind is TokenKind.RPAREN:
                    raise EmptyExpression.at(next_token)

            elif token.kind is TokenKind.RPAREN:
                while operator_stack and operator_stack[-1].kind is not TokenKind.LPAREN:
                    output.append(Operator(operator_stack.pop().kind))

                if not operator_stack:
                    raise UnmatchedClosingParenthesis.at(token)

                # Pop the open parenthesis
                operator_stack.pop()

                if next_kind in FORBIDDEN_AFTER_RPAREN:
                    raise UnexpectedOperand.at(next_token)

            elif is_operator(token.kind):
                if is_binary_operator(token.kind) and last_token is None:
                    raise MissingLeftOperand.at(token)

                while self.should_pop_op(operator_stack, token):
                    output.append(Operator(operator_stack.pop().kind))
                operator_stack.append(token)

                if next_token is None:
                    raise MissingRightOperand.at(token)
                if is_binary_operator(next_kind):
                    raise InvalidOperator.at(next_token)
                if next_kind is TokenKind.RPAREN:
                    raise InvalidOperand.at(next_token)

            else:
                raise ParseError.at(token, f"{token!r} cannot be processed")

            log.debug(
                "on token %r: output=%s stack=%s",
                token.value,
                output,
                [v.value for v in operator_stack],
            )

            last_token = token

        while operator_stack:
            token = operator_stack.pop()
            if token.kind is TokenKind.LPAREN:
                raise UnmatchedOpeningParenthesis.at(token)
            output.append(Operator(token.kind))

        return list(identifiers), output

    def parse(self, string):
        variables, postfix = self.parse_to_rpn(self.tokenize(string))
        if not postfix:
            raise EmptyExpression(EmptyExpression.default, 0, len(string))
        return CompiledExpression(variables, postfix, string)


parser = Parser()


def compile_expression(string):
    return parser.parse(string)


def try_compile(string, stream=None, color=False):
    """
    Compiles string, or writes a diagnostic to stream (stderr by default)
    and returns None
    """
    try:
        return compile_expression(string)
    except ParseError as e:
        log.debug("compilation failed: %s", e)
        print(format_diagnostic(string, e, color=color), file=stream or sys.stderr)
        return None
