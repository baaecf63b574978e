from typing import Optional

import pytest

from formula.errors import FunctionArityError, StructuralError, UndefinedVariableError
from formula.grammar import Expression, Variable
from formula.namespace import Namespace
from formula.operators import BinaryOperator
from formula.parser import parse
from formula.tokenizer import tokenize
from formula.value import Constant, Evaler


@pytest.mark.parametrize(
    "code, expected_names",
    [
        pytest.param("12.34 + 43.21 + 11.11", set()),
        pytest.param("a + b * a", {"a", "b"}),
        pytest.param("max(a, b) + c", {"a", "b", "c"}),
        pytest.param("-x ^ (y || z)", {"x", "y", "z"}),
        pytest.param("0 && never", {"never"}, id="both sides of && are resolved"),
        pytest.param("x / 0 + y % 0", {"x", "y"}),
        pytest.param("unknown(p, q) + r", {"p", "q", "r"}, id="unknown function"),
        pytest.param("unknown(p) + r", {"p", "r"}),
        pytest.param("sqrt(x, y)", {"x", "y"}, id="too many arguments"),
        pytest.param("min() + z * max(w, nope(v))", {"z", "w", "v"}),
    ],
)
def test_collect_variable_names(code: str, expected_names: set[str]) -> None:
    assert parse(tokenize(code)).collect_variable_names() == expected_names


def test_constant_has_no_variable_names() -> None:
    assert Constant(1.0).collect_variable_names() == set()


def test_structural_errors_propagate() -> None:
    with pytest.raises(StructuralError):
        Expression(()).collect_variable_names()


def test_collecting_does_not_affect_normal_evaluation() -> None:
    expression = parse(tokenize("sqrt(x, y) + unknown(x)"))
    assert expression.collect_variable_names() == {"x"}
    with pytest.raises(FunctionArityError):
        expression.evaluate(Namespace.from_variables({"x": 4}))


class FailingEvaler(Evaler):
    def evaluate(self, namespace: Namespace) -> float:
        raise UndefinedVariableError("no value for this operand")


def test_custom_resolution_failure_returns_names_seen_so_far() -> None:
    expression = Expression((Variable("a"), BinaryOperator.ADD, FailingEvaler(), BinaryOperator.ADD, Variable("b")))
    assert expression.collect_variable_names() == {"a"}


class DefaultingEvaler(Evaler):
    def evaluate(self, namespace: Namespace) -> float:
        value: Optional[float] = namespace.get("x")
        return 1.23 if value is None else value


def test_custom_evaler_gets_collector_for_free() -> None:
    assert DefaultingEvaler().collect_variable_names() == {"x"}
    assert DefaultingEvaler().evaluate(Namespace.from_variables({})) == 1.23
    assert DefaultingEvaler().evaluate(Namespace.from_variables({"x": 5})) == 5.0
