import io

import pandas as pd
import pytest

from boolexpr import compile_expression
from boolexpr.truth_table import (
    TableFormat,
    TooManyVariables,
    format_truth_table,
    generate_truth_table,
    print_truth_table,
)


def test_dataframe():
    df = generate_truth_table(compile_expression("A && B"))
    expected = pd.DataFrame(
        [[0, 0, 0], [0, 1, 0], [1, 0, 0], [1, 1, 1]],
        columns=["A", "B", "A && B"],
    )
    pd.testing.assert_frame_equal(df, expected)


@pytest.mark.parametrize("count", [1, 2, 3, 5])
def test_row_count(count):
    source = " ^ ".join("ABCDE"[:count])
    df = generate_truth_table(compile_expression(source))
    assert len(df) == 2**count
    patterns = {tuple(row) for row in df.iloc[:, :count].itertuples(index=False)}
    assert len(patterns) == 2**count


def test_format():
    table = format_truth_table(compile_expression("A && B"))
    assert table.split("\n") == [
        "",
        "------------",
        "|A|B|A && B|",
        "------------",
        "|0|0|     0|",
        "------------",
        "|0|1|     0|",
        "------------",
        "|1|0|     0|",
        "------------",
        "|1|1|     1|",
        "------------",
    ]


def test_format_long_names():
    table = TableFormat(compile_expression("Rain || !Dry"))
    assert table.header == "|Rain|Dry|Rain || !Dry|"
    assert table.row(0b01, 0) == "|   0|  1|           0|"


def test_print(capsys):
    expression = compile_expression("!A")
    print_truth_table(expression)
    assert capsys.readouterr().out == format_truth_table(expression) + "\n"

    stream = io.StringIO()
    print_truth_table(expression, stream=stream)
    assert "|1| 0|" in stream.getvalue()


def test_variable_limit():
    expression = compile_expression("A && B && C")
    with pytest.raises(TooManyVariables) as e:
        generate_truth_table(expression, max_variables=2)
    assert e.value.count == 3
    with pytest.raises(ValueError):
        format_truth_table(expression, max_variables=2)
    assert len(generate_truth_table(expression, max_variables=None)) == 8


def test_parallel_table():
    expression = compile_expression("A ^ B ^ C ^ D")
    pd.testing.assert_frame_equal(
        generate_truth_table(expression, workers=4),
        generate_truth_table(expression),
    )
