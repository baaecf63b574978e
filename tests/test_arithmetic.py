import math
from typing import Optional

import pytest

from formula.namespace import Namespace
from formula.parser import parse
from formula.tokenizer import tokenize


def eval_code(code: str, variables: Optional[dict[str, float]] = None) -> float:
    expression = parse(tokenize(code))
    return expression.evaluate(Namespace.from_variables(variables or {}))


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("-(1+2)", -3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("1 + 4 * 5", 21.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("2 * 3 ^ 2", 18.0),
        pytest.param("2^-1", 0.5),
        pytest.param("-2^2", 4.0, id="unary minus binds to the operand"),
        pytest.param("6-5-4-3", -6.0, id="subtraction is left-associative"),
        pytest.param("2^3^4", 2.0**81, id="power is right-associative"),
        pytest.param("0.1 + 0.2 + 0.3", 0.6, id="addition scans right to left"),
        pytest.param("8 / 4 % 3", 8.0, id="modulo binds tighter than division"),
        pytest.param("-7 % 3", -1.0, id="modulo sign follows dividend"),
        pytest.param("7 % -3", 1.0),
        # comparisons and logic
        pytest.param("1 < 2", 1.0),
        pytest.param("2 <= 2", 1.0),
        pytest.param("3 > 4", 0.0),
        pytest.param("3 >= 4", 0.0),
        pytest.param("1 == 1", 1.0),
        pytest.param("1 != 1", 0.0),
        pytest.param("1 < 2 == 1", 1.0),
        pytest.param("!0", 1.0),
        pytest.param("!5", 0.0),
        pytest.param("0 || 5", 5.0),
        pytest.param("3 || 5", 3.0),
        pytest.param("0 && 5", 0.0),
        pytest.param("3 && 5", 5.0),
        pytest.param("0 || 0 || 3", 3.0),
        pytest.param("3 && 0 || 4", 4.0),
        pytest.param("2 > 1 && 0 || 7", 7.0),
        # funcs
        pytest.param("sqrt(16) + max(1, 5, 3)", 9.0),
        pytest.param("min(4, -2) * abs(-3)", -6.0),
        pytest.param("round(2.5) + round(-2.5)", 0.0),
        pytest.param("int(-2.7)", -2.0),
        pytest.param("floor(-2.5) + ceil(2.5)", 0.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    assert eval_code(code) == expected_ret_val


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("12.34 + 43.21 + 11.11", 66.66),
        pytest.param("6/5/4/3", 0.1),
        pytest.param("exp(1)", math.e),
        pytest.param("log(exp(2.5))", 2.5),
    ],
)
def test_eval_approx(code: str, expected_ret_val: float) -> None:
    assert eval_code(code) == pytest.approx(expected_ret_val)


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1 / 0", math.inf),
        pytest.param("-1 / 0", -math.inf),
        pytest.param("10 ^ 400", math.inf),
        pytest.param("0 ^ -1", math.inf),
        pytest.param("exp(1000)", math.inf),
        pytest.param("log(0)", -math.inf),
    ],
)
def test_eval_infinities(code: str, expected_ret_val: float) -> None:
    assert eval_code(code) == expected_ret_val


@pytest.mark.parametrize(
    "code",
    [
        pytest.param("0 / 0"),
        pytest.param("5 % 0"),
        pytest.param("(0 - 8) ^ (1 / 3)"),
        pytest.param("sqrt(-1)"),
        pytest.param("1 + sin(1 / 0)"),
    ],
)
def test_eval_nan(code: str) -> None:
    assert math.isnan(eval_code(code))


@pytest.mark.parametrize(
    "code, variables, expected_ret_val",
    [
        pytest.param("x || 10", {"x": 0}, 10.0),
        pytest.param("x || 10", {"x": 4}, 4.0),
        pytest.param("a + b * a", {"a": 2, "b": 3}, 8.0),
        pytest.param("(rate + 1) ^ years", {"rate": 0.5, "years": 2}, 2.25),
        pytest.param("max(x, y) - min(x, y)", {"x": 1.5, "y": -1}, 2.5),
    ],
)
def test_eval_with_variables(code: str, variables: dict[str, float], expected_ret_val: float) -> None:
    assert eval_code(code, variables) == expected_ret_val
