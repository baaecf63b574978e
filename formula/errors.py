from dataclasses import dataclass, field


@dataclass
class EvalError(Exception):
    errmsg: str
    context: list[str] = field(default_factory=list)

    def pre(self, note: str) -> "EvalError":
        """Prepends a context note, innermost notes end up closest to the message"""
        self.context.insert(0, note)
        return self

    def __str__(self) -> str:
        return ": ".join([*self.context, self.errmsg])


class StructuralError(EvalError):
    pass


class ResolutionError(EvalError):
    pass


class UndefinedVariableError(ResolutionError):
    pass


class UnknownFunctionError(ResolutionError):
    pass


class FunctionArityError(EvalError):
    pass
