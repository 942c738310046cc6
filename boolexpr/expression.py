from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging

from .bitstring import read_bit
from .frozen import FrozenDict, FrozenList
from .tokens import TokenKind

log = logging.getLogger(__name__)


# Bitwise on 0/1 values
OPERATIONS = {
    TokenKind.NOT: lambda a: 0 if a else 1,
    TokenKind.AND: lambda a, b: a & b,
    TokenKind.OR: lambda a, b: a | b,
    TokenKind.XOR: lambda a, b: a ^ b,
}


@dataclass(frozen=True)
class Identifier:
    id: int

    def __repr__(self):
        return f"Identifier({self.id})"


@dataclass(frozen=True)
class Operator:
    kind: TokenKind

    @property
    def arity(self):
        return 1 if self.kind is TokenKind.NOT else 2

    def exec(self, args):
        return OPERATIONS[self.kind](*args)

    def __repr__(self):
        return f"Operator({self.kind.name})"


class CompiledExpression:
    """
    A boolean expression in reverse polish notation

    Variables are referred to by their id, which is their position in
    first occurrence order. Nothing here changes after construction, so one
    instance can be evaluated from many threads at once.
    """

    def __init__(self, variables, postfix, source=None):
        self._variables = FrozenList(variables)
        self._postfix = FrozenList(postfix)
        self._ids = FrozenDict((name, i) for i, name in enumerate(self._variables))
        self._source = source

    @property
    def variables(self):
        return self._variables

    @property
    def postfix(self):
        return self._postfix

    @property
    def variable_ids(self):
        return self._ids

    @property
    def variable_count(self):
        return len(self._variables)

    @property
    def source(self):
        return self._source

    def bit_position(self, id):
        """
        Variable 0 sits on the most significant bit of the assignment,
        the last variable on bit 0
        """
        return self.variable_count - 1 - id

    def evaluate(self, assignment):
        """
        Runs the postfix program against one assignment

        assignment is a BitString or a plain int. The result is 0 or 1.
        """
        stack = []
        for token in self._postfix:
            if isinstance(token, Identifier):
                stack.append(read_bit(assignment, self.bit_position(token.id)))
            else:
                args = [stack.pop() for _ in range(token.arity)][::-1]
                stack.append(token.exec(args))
        return stack.pop()

    def assignment_for(self, values):
        """
        Counter matching a {name: truthy} mapping
        """
        counter = 0
        for name, id in self._ids.items():
            if values[name]:
                counter |= 1 << self.bit_position(id)
        return counter

    def evaluate_mapping(self, values):
        return self.evaluate(self.assignment_for(values))

    def assignments(self):
        return iter(range(1 << self.variable_count))

    def _evaluate_range(self, counters):
        return [self.evaluate(counter) for counter in counters]

    def evaluate_all(self, workers=None):
        """
        Result bit for every assignment, in counter order

        With workers > 1 the counters are split into contiguous chunks and
        evaluated on a thread pool.
        """
        total = 1 << self.variable_count
        if not workers or workers <= 1 or total < workers:
            return self._evaluate_range(range(total))

        chunk = -(-total // workers)
        ranges = [range(lo, min(lo + chunk, total)) for lo in range(0, total, chunk)]
        log.debug("evaluating %d assignments in %d chunks", total, len(ranges))

        results = []
        with ThreadPoolExecutor(max_workers=workers) as executor:
            for part in executor.map(self._evaluate_range, ranges):
                results.extend(part)
        return results

    def __eq__(self, other):
        if not isinstance(other, CompiledExpression):
            return NotImplemented
        return self._variables == other._variables and self._postfix == other._postfix

    def __hash__(self):
        return hash((tuple(self._variables), tuple(self._postfix)))

    def __repr__(self):
        return f"CompiledExpression(variables={list(self._variables)!r}, postfix={list(self._postfix)!r})"
