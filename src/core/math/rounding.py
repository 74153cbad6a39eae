"""
RoundingMode — политики округления до целого

Значения enum совпадают с константами модуля decimal, поэтому режим
передаётся в Decimal.to_integral_value() без таблиц перевода.
"""

import decimal
from enum import Enum


class RoundingMode(str, Enum):
    """
    Режим округления при преобразовании в целое.

    FLOOR/CEILING — к -inf/+inf
    DOWN/UP — к нулю/от нуля
    HALF_* — к ближайшему, различается только поведение на середине
    """

    FLOOR = decimal.ROUND_FLOOR
    CEILING = decimal.ROUND_CEILING
    DOWN = decimal.ROUND_DOWN
    UP = decimal.ROUND_UP
    HALF_UP = decimal.ROUND_HALF_UP
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    ZERO_FIVE_UP = decimal.ROUND_05UP
