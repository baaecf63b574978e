import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def bool_to_float(b: bool) -> float:
    return 1.0 if b else 0.0
