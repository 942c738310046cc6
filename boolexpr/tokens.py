from enum import Enum
import logging
import re

log = logging.getLogger(__name__)

##########
# Tokens #
##########

# The lexer tries every token class in order and keeps the first match.
# Multi character operators come before anything that could match a prefix of them


class TokenKind(Enum):
    NOT = "NOT"
    AND = "AND"
    OR = "OR"
    XOR = "XOR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    IDENT = "IDENT"
    ERROR = "ERROR"


# Lower number => binds tighter
# Used only to decide when operators leave the operator stack
PRECEDENCE = {
    TokenKind.NOT: 0,
    TokenKind.AND: 1,
    TokenKind.OR: 2,
    TokenKind.XOR: 3,
}

BINARY_OPERATORS = frozenset((TokenKind.AND, TokenKind.OR, TokenKind.XOR))

OPERATORS = frozenset(PRECEDENCE)


def is_binary_operator(kind):
    return kind in BINARY_OPERATORS


def is_operator(kind):
    return kind in OPERATORS


# Utils


def str_match(string: str, m: str, pos: int = 0):
    if pos >= len(string):
        return None
    if string.startswith(m, pos):
        return string[pos : pos + len(m)], len(m)
    return None


def re_match(string: str, r, pos: int = 0):
    m = r.match(string, pos)
    if m:
        return m.group(0), m.end() - pos
    return None


class IToken:
    kind = None

    m_re = None
    m_str = None

    def __init__(self, value, start, end):
        self.value = value
        self.start = start
        self.end = end

    @classmethod
    def match(cls, string, pos=0):
        """
        Returns (value, length) when the token matches at pos, otherwise None
        """
        if cls.m_re is not None:
            return re_match(string, cls.m_re, pos)
        elif cls.m_str is not None:
            return str_match(string, cls.m_str, pos)
        raise NotImplementedError(cls)

    @property
    def span(self):
        return self.start, self.end

    def __eq__(self, other):
        if not isinstance(other, IToken):
            return NotImplemented
        return (self.kind, self.value, self.start, self.end) == (
            other.kind,
            other.value,
            other.start,
            other.end,
        )

    def __hash__(self):
        return hash((self.kind, self.value, self.start, self.end))

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.value!r} @[{self.start}, {self.end}]>"


class WhitespaceToken(IToken):
    """
    Matched and skipped, never emitted
    """


class Whitespace(WhitespaceToken):
    m_re = re.compile(r"[ \t\n\f]+")


class Negation(IToken):
    kind = TokenKind.NOT
    m_str = "!"


class And(IToken):
    kind = TokenKind.AND
    m_str = "&&"


class Or(IToken):
    kind = TokenKind.OR
    m_str = "||"


class Xor(IToken):
    kind = TokenKind.XOR
    m_str = "^"


class OpenParenthesis(IToken):
    kind = TokenKind.LPAREN
    m_str = "("


class CloseParenthesis(IToken):
    kind = TokenKind.RPAREN
    m_str = ")"


class Variable(IToken):
    # ASCII letters only, case sensitive
    kind = TokenKind.IDENT
    m_re = re.compile(r"[a-zA-Z]+")


class Unknown(IToken):
    """
    Emitted for a single character no other token accepts
    """

    kind = TokenKind.ERROR


TOKENS = [
    Whitespace,
    OpenParenthesis,
    CloseParenthesis,
    Negation,
    And,
    Or,
    Xor,
    Variable,
]


class Lexer:
    """
    Iterable over the tokens of a source string

    Every call to iter() scans again from the start of the source
    """

    def __init__(self, source, tokens=None):
        self.source = source
        self.tokens = tokens or TOKENS

    def __iter__(self):
        return self.tokenize()

    def tokenize(self):
        string = self.source
        pointer = 0
        while pointer < len(string):
            for token in self.tokens:
                if m := token.match(string, pointer):
                    v, l = m
                    if not issubclass(token, WhitespaceToken):
                        yield token(v, pointer, pointer + l)
                    pointer += l
                    break
            else:
                log.debug("unknown character %r at %d", string[pointer], pointer)
                yield Unknown(string[pointer], pointer, pointer + 1)
                pointer += 1


def tokenize(source):
    return iter(Lexer(source))
