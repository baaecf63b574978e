import math
from dataclasses import dataclass
from typing import Callable, Optional

from formula.errors import FunctionArityError

BuiltinFuncImpl = Callable[..., float]


@dataclass(frozen=True)
class BuiltinFunc:
    name: str
    fn: BuiltinFuncImpl
    min_args: int
    max_args: Optional[int]

    def accepts(self, arg_count: int) -> bool:
        return arg_count >= self.min_args and (self.max_args is None or arg_count <= self.max_args)

    def call(self, args: list[float]) -> float:
        if not self.accepts(len(args)):
            if self.max_args is None:
                expected = f"at least {self.min_args}"
            elif self.min_args == self.max_args:
                expected = str(self.min_args)
            else:
                expected = f"{self.min_args} to {self.max_args}"
            raise FunctionArityError(f"{self.name!r} expects {expected} argument(s), got {len(args)}")
        return self.fn(*args)


BUILTIN_FUNCS: dict[str, BuiltinFunc] = dict()


def register_builtin_func(name: str, min_args: int = 1, max_args: Optional[int] = 1):
    def decorator(fn: BuiltinFuncImpl) -> BuiltinFuncImpl:
        BUILTIN_FUNCS[name] = BuiltinFunc(name=name, fn=fn, min_args=min_args, max_args=max_args)
        return fn

    return decorator


def _integral(fn: Callable[[float], int], x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(fn(x))


@register_builtin_func("abs")
def abs_(x: float) -> float:
    return abs(x)


@register_builtin_func("sign")
def sign_(x: float) -> float:
    if math.isnan(x):
        return x
    return math.copysign(1.0, x)


@register_builtin_func("floor")
def floor_(x: float) -> float:
    return _integral(math.floor, x)


@register_builtin_func("ceil")
def ceil_(x: float) -> float:
    return _integral(math.ceil, x)


@register_builtin_func("round")
def round_(x: float) -> float:
    """Halves go away from zero, unlike python's round()"""
    if not math.isfinite(x):
        return x
    return math.copysign(math.floor(abs(x) + 0.5), x)


@register_builtin_func("int")
def int_(x: float) -> float:
    return _integral(math.trunc, x)


@register_builtin_func("sqrt")
def sqrt_(x: float) -> float:
    if x < 0:
        return math.nan
    return math.sqrt(x)


@register_builtin_func("log")
def log_(x: float) -> float:
    if x == 0:
        return -math.inf
    if x < 0:
        return math.nan
    return math.log(x)


@register_builtin_func("exp")
def exp_(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _trig(fn: Callable[[float], float], x: float) -> float:
    try:
        return fn(x)
    except ValueError:
        # sin(inf) and friends
        return math.nan


@register_builtin_func("sin")
def sin_(x: float) -> float:
    return _trig(math.sin, x)


@register_builtin_func("cos")
def cos_(x: float) -> float:
    return _trig(math.cos, x)


@register_builtin_func("tan")
def tan_(x: float) -> float:
    return _trig(math.tan, x)


@register_builtin_func("min", max_args=None)
def min_(*args: float) -> float:
    return min(args)


@register_builtin_func("max", max_args=None)
def max_(*args: float) -> float:
    return max(args)
