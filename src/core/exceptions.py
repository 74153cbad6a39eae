"""
Exceptions — таксономия ошибок разбора и преобразования чисел

Все ошибки терминальны для операции, которая их подняла:
- нет автоматического retry
- нет тихого fallback
- ошибки пробрасываются вызывающему коду, а не логируются и глотаются

ИЕРАРХИЯ:
    NumberError
    ├── InvalidInputError        (также ValueError)
    ├── DivisionByZeroError      (также ZeroDivisionError)
    └── PrecisionOverflowError   (также OverflowError)
"""

from decimal import Decimal


class NumberError(Exception):
    """Базовая ошибка числового ядра."""

    pass


class InvalidInputError(NumberError, ValueError):
    """
    Текст не соответствует ни одной поддерживаемой грамматике.

    Attributes:
        text: Нормализованный текст, который не удалось разобрать
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(f'Invalid input format: "{text}" is not a recognized number')


class DivisionByZeroError(NumberError, ZeroDivisionError):
    """
    Нулевой знаменатель в дроби (включая формы вида "0.000").

    Attributes:
        numerator: Числитель в текстовом виде
        denominator: Знаменатель в текстовом виде
    """

    def __init__(self, numerator: str, denominator: str):
        self.numerator = numerator
        self.denominator = denominator
        super().__init__(
            f"Can not divide fraction {numerator}/{denominator} by zero"
        )


class PrecisionOverflowError(NumberError, OverflowError):
    """
    Целое не помещается в целевой тип фиксированной ширины.

    Attributes:
        value: Значение, которое не удалось преобразовать
        bits: Ширина целевого знакового типа
    """

    def __init__(self, value: int, bits: int):
        self.value = value
        self.bits = bits
        super().__init__(
            f"Integer {Decimal(value)} does not fit into a signed {bits}-bit integer"
        )
