import threading

import pytest

from boolexpr import BitString, compile_expression
from boolexpr.expression import CompiledExpression, Identifier, Operator
from boolexpr.tokens import TokenKind


def test_and_scenario():
    expression = compile_expression("A && B")
    assert expression.evaluate(0b10) == 0
    assert expression.evaluate(0b11) == 1


def test_variable_zero_is_most_significant_bit():
    expression = compile_expression("A && !B")
    assert expression.bit_position(0) == 1
    assert expression.bit_position(1) == 0
    assert [expression.evaluate(i) for i in range(4)] == [0, 0, 1, 0]


@pytest.mark.parametrize(
    "source, results",
    [
        ("!A", [1, 0]),
        ("A && B", [0, 0, 0, 1]),
        ("A || B", [0, 1, 1, 1]),
        ("A ^ B", [0, 1, 1, 0]),
        ("A && B || !A", [1, 1, 0, 1]),
        ("A ^ A", [0, 0]),
        ("!(A || B) ^ C", [1, 0, 0, 1, 0, 1, 0, 1]),
    ],
)
def test_evaluate_all(source, results):
    assert compile_expression(source).evaluate_all() == results


def test_bitstring_assignment():
    expression = compile_expression("A ^ B")
    assert expression.evaluate(BitString(0b01, 8)) == 1
    assert expression.evaluate(BitString.of_type("u128", 0b11)) == 0


def test_evaluate_mapping():
    expression = compile_expression("A && !B || C")
    assert expression.assignment_for({"A": True, "B": False, "C": False}) == 0b100
    assert expression.evaluate_mapping({"A": True, "B": False, "C": False}) == 1
    assert expression.evaluate_mapping({"A": True, "B": True, "C": False}) == 0
    with pytest.raises(KeyError):
        expression.evaluate_mapping({"A": True})


def test_evaluation_is_repeatable():
    expression = compile_expression("A ^ (B && !C)")
    for counter in expression.assignments():
        assert expression.evaluate(counter) == expression.evaluate(counter)


def test_assignments_cover_every_pattern_once():
    expression = compile_expression("A || B || C")
    assert list(expression.assignments()) == list(range(8))


def test_parallel_evaluation_matches_sequential():
    expression = compile_expression("(A ^ B) && !(C || D) ^ E")
    expected = expression.evaluate_all()
    assert len(expected) == 32
    assert expression.evaluate_all(workers=3) == expected
    assert expression.evaluate_all(workers=64) == expected


def test_shared_between_threads():
    expression = compile_expression("A && B ^ C")
    expected = expression.evaluate_all()
    results = {}

    def run(n):
        results[n] = [expression.evaluate(c) for c in expression.assignments()]

    threads = [threading.Thread(target=run, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert all(r == expected for r in results.values())


def test_compiled_expression_is_immutable():
    expression = compile_expression("A && B")
    with pytest.raises(TypeError):
        expression.variables.append("C")
    with pytest.raises(TypeError):
        expression.postfix[0] = Identifier(1)
    with pytest.raises(TypeError):
        expression.variable_ids["C"] = 2
    with pytest.raises(AttributeError):
        expression.variables = ["C"]


def test_built_by_hand():
    expression = CompiledExpression(
        ["X"], [Identifier(0), Operator(TokenKind.NOT)], source="!X"
    )
    assert expression == compile_expression("!X")
    assert hash(expression) == hash(compile_expression("!X"))
    assert repr(expression) == (
        "CompiledExpression(variables=['X'], postfix=[Identifier(0), Operator(NOT)])"
    )
