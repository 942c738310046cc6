import logging
import sys

import pandas as pd

from .bitstring import read_bit

log = logging.getLogger(__name__)

MAX_VARIABLES = 20


class TooManyVariables(ValueError):
    def __init__(self, count, limit):
        super().__init__(
            f"expression has {count} variables, truth tables are limited to {limit}"
        )
        self.count = count
        self.limit = limit


def check_size(expression, max_variables=MAX_VARIABLES):
    if max_variables is not None and expression.variable_count > max_variables:
        raise TooManyVariables(expression.variable_count, max_variables)


def title_of(expression):
    return expression.source.strip() if expression.source is not None else "result"


def assignment_bits(expression, counter):
    """
    The bit of every variable in counter, in variable order
    """
    return [
        read_bit(counter, expression.bit_position(id))
        for id in range(expression.variable_count)
    ]


def generate_truth_table(expression, workers=None, max_variables=MAX_VARIABLES):
    """
    Returns pandas dataframe
    """
    check_size(expression, max_variables)

    headers = [*expression.variables, title_of(expression)]
    results = expression.evaluate_all(workers)

    rows = [
        [*assignment_bits(expression, counter), result]
        for counter, result in zip(expression.assignments(), results)
    ]
    log.debug("generated %d rows for %r", len(rows), title_of(expression))

    return pd.DataFrame(rows, columns=headers)


class TableFormat:
    def __init__(self, expression):
        self.expression = expression
        self.title = title_of(expression)
        self.header = f"|{'|'.join(expression.variables)}|{self.title}|"
        self.row_separator = "-" * len(self.header)

    def header_lines(self):
        return ["", self.row_separator, self.header, self.row_separator]

    def row(self, counter, result):
        cells = [
            f"{bit:>{len(name)}}"
            for name, bit in zip(
                self.expression.variables, assignment_bits(self.expression, counter)
            )
        ]
        return f"|{'|'.join(cells)}|{result:>{len(self.title)}}|"

    def lines(self, results):
        yield from self.header_lines()
        for counter, result in zip(self.expression.assignments(), results):
            yield self.row(counter, result)
            yield self.row_separator


def format_truth_table(expression, workers=None, max_variables=MAX_VARIABLES):
    check_size(expression, max_variables)
    table = TableFormat(expression)
    return "\n".join(table.lines(expression.evaluate_all(workers)))


def print_truth_table(expression, stream=None, **kws):
    print(format_truth_table(expression, **kws), file=stream or sys.stdout)
