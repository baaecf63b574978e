import abc
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from formula.errors import ResolutionError

if TYPE_CHECKING:
    from formula.namespace import Namespace

logger = logging.getLogger(__name__)


class Evaler(abc.ABC):
    """Anything that can be evaluated to a float against a namespace"""

    @abc.abstractmethod
    def evaluate(self, namespace: "Namespace") -> float:
        ...

    def collect_variable_names(self) -> set[str]:
        """Names of all variables referenced by this node, found by a dry-run evaluation.

        The recording namespace never supplies values, so every variable and every
        unknown or misused function resolves to NaN and every operand still gets visited.
        A resolution failure raised by a custom Evaler ends the dry run early, names seen
        up to that point are returned.
        """
        from formula.namespace import RecordingNamespace

        namespace = RecordingNamespace()
        try:
            self.evaluate(namespace)
        except ResolutionError as e:
            logger.debug("Variable name collection stopped early: %s", e)
        return namespace.names


@dataclass(frozen=True)
class Constant(Evaler):
    value: float

    def evaluate(self, namespace: "Namespace") -> float:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
