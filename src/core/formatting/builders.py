"""
Math builders — композиция выражений из текстовых фрагментов

Fragment — capability "рендерится в текстовый фрагмент". Её реализуют:
- TextFragment (обёртка над произвольным текстом)
- MathBuilder и наследники (LatexBuilder, HumanStringBuilder)

Операторы builder'а принимают str или любой Fragment в качестве правого
операнда и добавляют "self <op> other" слева направо, без учёта приоритета
операций. Скобки расставляет вызывающий код через wrap().

Builder неизменяем: каждый оператор возвращает новый экземпляр, поэтому
закэшированное представление числа не меняется при композиции.
"""

from typing import ClassVar, Final, Protocol, Union, runtime_checkable


@runtime_checkable
class Fragment(Protocol):
    """Объект, который рендерится в текстовый фрагмент."""

    def render(self) -> str:
        ...


Operand = Union[str, Fragment]


def render_operand(operand: Operand) -> str:
    """
    Текст операнда.

    Raises:
        TypeError: Если operand не str и не Fragment
    """
    if isinstance(operand, str):
        return operand
    if isinstance(operand, Fragment):
        return operand.render()
    raise TypeError(
        f"Operand must be str or implement render(), got {type(operand).__name__}"
    )


class TextFragment:
    """Простой текстовый операнд."""

    def __init__(self, text: str):
        self.text = text

    def render(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"TextFragment({self.text!r})"


# =============================================================================
# TOOLKITS
# =============================================================================


class LatexToolkit:
    """Операторы и шаблоны LaTeX."""

    PLUS: Final[str] = "+"
    MINUS: Final[str] = "-"
    MULTIPLY: Final[str] = "\\cdot"
    DIVIDE: Final[str] = "\\div"
    EQUALS: Final[str] = "="

    @staticmethod
    def frac(numerator: Operand, denominator: Operand) -> str:
        """
        Examples:
            >>> LatexToolkit.frac("3", "4")
            '\\\\frac{3}{4}'
        """
        return f"\\frac{{{render_operand(numerator)}}}{{{render_operand(denominator)}}}"


class HumanStringToolkit:
    """Операторы человекочитаемой записи (валидный ввод SmartNumber)."""

    PLUS: Final[str] = "+"
    MINUS: Final[str] = "-"
    MULTIPLY: Final[str] = "*"
    DIVIDE: Final[str] = "/"
    EQUALS: Final[str] = "="


def compose(left: str, operator: str, right: Operand) -> str:
    """Левоассоциативная композиция "left op right"."""
    return f"{left} {operator} {render_operand(right)}"


def wrap(text: str, left: str, right: str | None = None) -> str:
    """
    Обрамление текста; right по умолчанию совпадает с left.

    Examples:
        >>> wrap("1 + 2", "(", ")")
        '(1 + 2)'
        >>> wrap("x", "|")
        '|x|'
    """
    return f"{left}{text}{left if right is None else right}"


# =============================================================================
# BUILDERS
# =============================================================================


class MathBuilder:
    """
    Базовый неизменяемый builder выражения.

    Наследники задают toolkit с символами операторов.
    """

    toolkit: ClassVar[type] = HumanStringToolkit

    def __init__(self, text: Operand = ""):
        self._text = render_operand(text)

    @property
    def text(self) -> str:
        """Текст выражения без внешних разделителей."""
        return self._text

    def _derive(self, text: str) -> "MathBuilder":
        return type(self)(text)

    def operator(self, operator: str, other: Operand) -> "MathBuilder":
        """Новый builder "self <operator> other"."""
        return self._derive(compose(self._text, operator, other))

    def plus(self, other: Operand) -> "MathBuilder":
        return self.operator(self.toolkit.PLUS, other)

    def minus(self, other: Operand) -> "MathBuilder":
        return self.operator(self.toolkit.MINUS, other)

    def multiplied_by(self, other: Operand) -> "MathBuilder":
        return self.operator(self.toolkit.MULTIPLY, other)

    def divided_by(self, other: Operand) -> "MathBuilder":
        return self.operator(self.toolkit.DIVIDE, other)

    def equals(self, other: Operand) -> "MathBuilder":
        return self.operator(self.toolkit.EQUALS, other)

    def wrap(self, left: str, right: str | None = None) -> "MathBuilder":
        """Новый builder с обрамлённым выражением."""
        return self._derive(wrap(self._text, left, right))

    def render(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.render()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MathBuilder):
            return NotImplemented
        return type(self) is type(other) and self.render() == other.render()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.render()))


class HumanStringBuilder(MathBuilder):
    """Человекочитаемое выражение: "1/2 + 3"."""

    toolkit = HumanStringToolkit


class LatexBuilder(MathBuilder):
    """
    LaTeX выражение с необязательными внешними разделителями
    (например, "$" ... "$"). Разделители добавляются только при рендере.
    """

    toolkit = LatexToolkit

    def __init__(
        self,
        latex: Operand = "",
        delimiter_left: str | None = None,
        delimiter_right: str | None = None,
    ):
        super().__init__(latex)
        self.delimiter_left = delimiter_left
        self.delimiter_right = delimiter_right if delimiter_right is not None else delimiter_left

    def _derive(self, text: str) -> "LatexBuilder":
        return LatexBuilder(text, self.delimiter_left, self.delimiter_right)

    def with_delimiters(self, left: str, right: str | None = None) -> "LatexBuilder":
        """Новый builder с заданными внешними разделителями."""
        return LatexBuilder(self._text, left, right)

    def render(self) -> str:
        if self.delimiter_left is None:
            return self._text
        return wrap(self._text, self.delimiter_left, self.delimiter_right)
