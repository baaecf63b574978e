import math

import pytest

from formula.builtins import BUILTIN_FUNCS
from formula.errors import FunctionArityError, UnknownFunctionError
from formula.namespace import Namespace
from formula.parser import parse
from formula.tokenizer import tokenize


@pytest.mark.parametrize(
    "name, args, expected",
    [
        pytest.param("abs", [-2.5], 2.5),
        pytest.param("sign", [-3.0], -1.0),
        pytest.param("sign", [0.0], 1.0),
        pytest.param("round", [0.5], 1.0),
        pytest.param("round", [-1.5], -2.0),
        pytest.param("int", [2.9], 2.0),
        pytest.param("floor", [math.inf], math.inf),
        pytest.param("sqrt", [2.25], 1.5),
        pytest.param("log", [1.0], 0.0),
        pytest.param("min", [3.0], 3.0),
        pytest.param("max", [3.0, 7.0, -1.0], 7.0),
    ],
)
def test_builtin(name: str, args: list[float], expected: float) -> None:
    assert BUILTIN_FUNCS[name].call(args) == expected


@pytest.mark.parametrize("name", ["floor", "ceil", "round", "int", "sign", "sqrt", "log", "cos"])
def test_builtin_propagates_nan(name: str) -> None:
    assert math.isnan(BUILTIN_FUNCS[name].call([math.nan]))


@pytest.mark.parametrize(
    "code, errmsg",
    [
        pytest.param("sqrt(1, 2)", "'sqrt' expects 1 argument(s), got 2"),
        pytest.param("min()", "'min' expects at least 1 argument(s), got 0"),
    ],
)
def test_builtin_arity(code: str, errmsg: str) -> None:
    with pytest.raises(FunctionArityError) as exc_info:
        parse(tokenize(code)).evaluate(Namespace.from_variables({}))
    assert exc_info.value.errmsg == errmsg


def test_unknown_function() -> None:
    with pytest.raises(UnknownFunctionError, match="Unknown function 'nope'"):
        parse(tokenize("1 + nope(2)")).evaluate(Namespace.from_variables({}))
