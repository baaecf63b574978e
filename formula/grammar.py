from dataclasses import dataclass

from formula import runtime
from formula.errors import EvalError
from formula.namespace import Namespace
from formula.operators import BinaryOperator, UnaryOperator, apply_unary_operator
from formula.value import Evaler


@dataclass(frozen=True)
class Variable(Evaler):
    name: str

    def evaluate(self, namespace: Namespace) -> float:
        return namespace.get_variable(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class UnaryOperation(Evaler):
    operator: UnaryOperator
    operand: Evaler

    def evaluate(self, namespace: Namespace) -> float:
        return apply_unary_operator(self.operator, namespace.resolve(self.operand))

    def __str__(self) -> str:
        return f"{self.operator}{_operand_str(self.operand)}"


@dataclass(frozen=True)
class FunctionCall(Evaler):
    name: str
    args: tuple["Expression", ...]

    def evaluate(self, namespace: Namespace) -> float:
        # args first, so variable name collection records them whatever happens to the call
        arg_values: list[float] = []
        for i, arg in enumerate(self.args):
            try:
                arg_values.append(namespace.resolve(arg))
            except EvalError as e:
                e.pre(f"{self.name}() argument {i}")
                raise

        return namespace.call_function(self.name, arg_values)

    def __str__(self) -> str:
        return f"{self.name}({', '.join(str(a) for a in self.args)})"


ExpressionToken = Evaler | BinaryOperator


@dataclass(frozen=True)
class Expression(Evaler):
    """Flattened alternating sequence: operand, operator, operand, ..., operand"""

    tokens: tuple[ExpressionToken, ...]

    def evaluate(self, namespace: Namespace) -> float:
        return runtime.evaluate(self, namespace)

    def __str__(self) -> str:
        return " ".join(_operand_str(t) if isinstance(t, Evaler) else str(t) for t in self.tokens)


def _operand_str(operand: Evaler) -> str:
    if isinstance(operand, Expression):
        return f"({operand})"
    return str(operand)
