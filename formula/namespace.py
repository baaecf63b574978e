import logging
import math
from typing import Callable, Mapping, Optional

from formula.builtins import BUILTIN_FUNCS
from formula.errors import UndefinedVariableError, UnknownFunctionError
from formula.value import Evaler

logger = logging.getLogger(__name__)

VariableLookup = Callable[[str], Optional[float]]


class Namespace:
    """Resolves operands to floats, looking up variables lazily through a callback.

    Lookups are cached by name for the lifetime of the namespace, so the callback
    is asked about each name at most once (unless it had no value to give).
    """

    def __init__(self, lookup: VariableLookup) -> None:
        self._lookup = lookup
        self._cache: dict[str, float] = {}

    @classmethod
    def from_variables(cls, variables: Mapping[str, float]) -> "Namespace":
        def lookup(name: str) -> Optional[float]:
            value = variables.get(name)
            return None if value is None else float(value)

        return cls(lookup)

    def get(self, name: str) -> Optional[float]:
        if name in self._cache:
            return self._cache[name]
        logger.debug("Namespace cache miss: %s", name)
        value = self._lookup(name)
        if value is not None:
            self._cache[name] = value
        return value

    def get_variable(self, name: str) -> float:
        value = self.get(name)
        if value is None:
            return self.missing(name)
        return value

    def missing(self, name: str) -> float:
        raise UndefinedVariableError(f"Undefined variable {name!r}")

    def call_function(self, name: str, args: list[float]) -> float:
        func = BUILTIN_FUNCS.get(name)
        if func is None:
            return self.missing_function(name, args)
        return func.call(args)

    def missing_function(self, name: str, args: list[float]) -> float:
        raise UnknownFunctionError(f"Unknown function {name!r}")

    def clear_cache(self) -> None:
        self._cache.clear()

    def resolve(self, operand: Evaler) -> float:
        return operand.evaluate(self)


class RecordingNamespace(Namespace):
    """Never supplies values, only remembers which variable names were asked for.

    Unknown functions and calls with the wrong number of arguments give NaN too,
    so every operand after them is still visited.
    """

    def __init__(self) -> None:
        self.names: set[str] = set()
        super().__init__(self._record)

    def _record(self, name: str) -> Optional[float]:
        self.names.add(name)
        return None

    def missing(self, name: str) -> float:
        return math.nan

    def call_function(self, name: str, args: list[float]) -> float:
        func = BUILTIN_FUNCS.get(name)
        if func is not None and not func.accepts(len(args)):
            return self.missing_function(name, args)
        return super().call_function(name, args)

    def missing_function(self, name: str, args: list[float]) -> float:
        return math.nan
