import logging
from typing import TYPE_CHECKING

from formula.errors import EvalError, StructuralError
from formula.namespace import Namespace
from formula.operators import REDUCTION_ORDER, Associativity, BinaryOperator, apply_binary_operator
from formula.value import Evaler

if TYPE_CHECKING:
    from formula.grammar import Expression

logger = logging.getLogger(__name__)

Values = list[float]
Operators = list[BinaryOperator]


def evaluate(expression: "Expression", namespace: Namespace) -> float:
    values, operators = resolve_operands(expression, namespace)
    values, operators = reduce_operators(values, operators)

    if operators:
        raise StructuralError("unhandled expression operators")
    if len(values) != 1:
        raise StructuralError("more than one final expression value")
    return values[0]


def resolve_operands(expression: "Expression", namespace: Namespace) -> tuple[Values, Operators]:
    """Splits the flattened expression into resolved values and the operators between them"""
    tokens = expression.tokens
    if len(tokens) % 2 != 1:
        raise StructuralError("malformed expression: even length")

    values: Values = []
    operators: Operators = []
    for i, token in enumerate(tokens):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Expression token (%d, %s)", i, token)
        if isinstance(token, Evaler):
            if i % 2 == 1:
                raise StructuralError(f"found operand at odd index {i}")
            try:
                values.append(namespace.resolve(token))
            except EvalError as e:
                e.pre(f"resolving operand {i // 2} ({token})")
                raise
        elif isinstance(token, BinaryOperator):
            if i % 2 == 0:
                raise StructuralError(f"found binary operator at even index {i}")
            operators.append(token)
        else:
            raise StructuralError(f"unexpected expression token at index {i}: {token!r}")
    return values, operators


def reduce_operators(values: Values, operators: Operators) -> tuple[Values, Operators]:
    """Collapses operators tier by tier, mutating both lists in place"""
    for operator, associativity in REDUCTION_ORDER:
        if associativity is Associativity.RIGHT_TO_LEFT:
            values, operators = _reduce_right_to_left(values, operators, operator)
        else:
            values, operators = _reduce_left_to_right(values, operators, operator)
    return values, operators


def _collapse(values: Values, operators: Operators, i: int) -> tuple[Values, Operators]:
    operator = operators.pop(i)
    right = values.pop(i + 1)
    result = apply_binary_operator(operator, values[i], right)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Collapse at %d: %r %s %r = %r", i, values[i], operator, right, result)
    values[i] = result
    return values, operators


def _reduce_right_to_left(values: Values, operators: Operators, target: BinaryOperator) -> tuple[Values, Operators]:
    # collapsing at i only shifts indices >= i, so the downward scan never restarts
    i = len(operators) - 1
    while i >= 0:
        if operators[i] is target:
            values, operators = _collapse(values, operators, i)
        i -= 1
    return values, operators


def _reduce_left_to_right(values: Values, operators: Operators, target: BinaryOperator) -> tuple[Values, Operators]:
    i = 0
    while i < len(operators):
        if operators[i] is target:
            values, operators = _collapse(values, operators, i)
            i = 0  # everything right of i has shifted, start over
            continue
        i += 1
    return values, operators
