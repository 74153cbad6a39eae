"""
InputNormalizer — очистка пользовательского ввода перед разбором

Шаги (строго по порядку):
1. Удаление пробельных символов строго между двумя цифрами ("1 000" → "1000")
2. Удаление хвостовых нулей дробной части и висящей точки
   ("2.500" → "2.5", "3.000" → "3")
3. Схлопывание ведущей серии знаков (2+ символов "+"/"-") по чётности
   количества "-" с рекурсивной нормализацией остатка
   ("---6" → "-6", "--6" → "6")

Нормализация никогда не поднимает ошибок: неразбираемый остаток
отклоняет LiteralParser.
"""

import re

# Пробелы строго между цифрами
_DIGIT_GAP_RE = re.compile(r"(?<=\d)\s+(?=\d)")

# Десятичный литерал с хвостовыми нулями дробной части
_TRAILING_ZEROS_RE = re.compile(r"^(?P<sign>[+-]*)(?P<int>\d*)\.(?P<frac>\d*?)0+$")

# Ведущая серия из двух и более знаков
_SIGN_RUN_RE = re.compile(r"^(?P<signs>[+-]{2,})(?P<rest>.*)$", re.DOTALL)


def collapse_signs(signs: str) -> str:
    """
    Схлопывание серии знаков по чётности количества "-".

    "+" нейтрален, значим только "-".

    Examples:
        >>> collapse_signs("---")
        '-'
        >>> collapse_signs("-+-")
        ''
    """
    return "-" if signs.count("-") % 2 else ""


def strip_fraction_zeros(text: str) -> str:
    """
    Удаление хвостовых нулей дробной части и висящей точки.

    Examples:
        >>> strip_fraction_zeros("2.500")
        '2.5'
        >>> strip_fraction_zeros("-3.000")
        '-3'
        >>> strip_fraction_zeros(".000")
        '0'
        >>> strip_fraction_zeros("1/2.50")
        '1/2.50'
    """
    match = _TRAILING_ZEROS_RE.match(text)
    if match is None:
        return text

    integer_part = match["int"] or "0"
    fraction_part = match["frac"]
    if fraction_part:
        return f"{match['sign']}{integer_part}.{fraction_part}"
    return f"{match['sign']}{integer_part}"


def normalize(raw: str) -> str:
    """
    Нормализация сырого текста числа.

    Args:
        raw: Пользовательский ввод

    Returns:
        Нормализованная строка (может оставаться невалидной)

    Examples:
        >>> normalize("1 000 000")
        '1000000'
        >>> normalize("---6")
        '-6'
        >>> normalize("--2.500")
        '2.5'
    """
    text = _DIGIT_GAP_RE.sub("", raw)
    text = strip_fraction_zeros(text)

    match = _SIGN_RUN_RE.match(text)
    if match is not None:
        return normalize(collapse_signs(match["signs"]) + match["rest"])

    return text
