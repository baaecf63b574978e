import enum
import math

from formula.utils import PrintableEnum, bool_to_float


class BinaryOperator(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    EQ = "=="
    NE = "!="
    AND = "&&"
    OR = "||"

    def __str__(self) -> str:
        return self.value

    __repr__ = __str__


class UnaryOperator(enum.Enum):
    NEG = "-"
    POS = "+"
    NOT = "!"

    def __str__(self) -> str:
        return self.value

    __repr__ = __str__


class Associativity(PrintableEnum):
    LEFT_TO_RIGHT = enum.auto()
    RIGHT_TO_LEFT = enum.auto()


# 2^3^4 is 2^(3^4); 6-5-4-3 is ((6-5)-4)-3 and 6/5/4/3 likewise.
# + and * don't care about direction but keep it for bit-exact results.
REDUCTION_ORDER: list[tuple[BinaryOperator, Associativity]] = [
    (BinaryOperator.POW, Associativity.RIGHT_TO_LEFT),
    (BinaryOperator.MOD, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.DIV, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.MUL, Associativity.RIGHT_TO_LEFT),
    (BinaryOperator.SUB, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.ADD, Associativity.RIGHT_TO_LEFT),
    (BinaryOperator.LT, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.GT, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.LTE, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.GTE, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.EQ, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.NE, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.AND, Associativity.LEFT_TO_RIGHT),
    (BinaryOperator.OR, Associativity.LEFT_TO_RIGHT),
]


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and x % 2 == 1


def _div(left: float, right: float) -> float:
    if right == 0.0:
        if left == 0.0 or math.isnan(left) or math.isnan(right):
            return math.nan
        return math.copysign(math.inf, math.copysign(1.0, left) * math.copysign(1.0, right))
    return left / right


def _mod(left: float, right: float) -> float:
    try:
        return math.fmod(left, right)
    except ValueError:
        # fmod(x, 0) and fmod(inf, y)
        return math.nan


def _pow(left: float, right: float) -> float:
    try:
        return math.pow(left, right)
    except OverflowError:
        return math.copysign(math.inf, left) if _is_odd_integer(right) else math.inf
    except ValueError:
        if left == 0.0:
            return math.copysign(math.inf, left) if _is_odd_integer(right) else math.inf
        # negative base, fractional exponent
        return math.nan


def apply_binary_operator(op: BinaryOperator, left: float, right: float) -> float:
    if op is BinaryOperator.ADD:
        return left + right
    elif op is BinaryOperator.SUB:
        return left - right
    elif op is BinaryOperator.MUL:
        return left * right
    elif op is BinaryOperator.DIV:
        return _div(left, right)
    elif op is BinaryOperator.MOD:
        return _mod(left, right)
    elif op is BinaryOperator.POW:
        return _pow(left, right)
    elif op is BinaryOperator.LT:
        return bool_to_float(left < right)
    elif op is BinaryOperator.LTE:
        return bool_to_float(left <= right)
    elif op is BinaryOperator.GT:
        return bool_to_float(left > right)
    elif op is BinaryOperator.GTE:
        return bool_to_float(left >= right)
    elif op is BinaryOperator.EQ:
        return bool_to_float(left == right)
    elif op is BinaryOperator.NE:
        return bool_to_float(left != right)
    elif op is BinaryOperator.OR:
        # not a boolean: returns an operand, so "x || 10" works as a default
        return left if left != 0.0 else right
    elif op is BinaryOperator.AND:
        return left if left == 0.0 else right
    else:
        raise ValueError(f"Unexpected binary operator: {op!r}")


def apply_unary_operator(op: UnaryOperator, operand: float) -> float:
    if op is UnaryOperator.NEG:
        return -operand
    elif op is UnaryOperator.POS:
        return operand
    elif op is UnaryOperator.NOT:
        return bool_to_float(operand == 0.0)
    else:
        raise ValueError(f"Unexpected unary operator: {op!r}")
