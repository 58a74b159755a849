"""
Units — Конверсия денежных единиц

Все суммы внутри системы — целые числа в наименьшей единице (wei).
Float никогда не используется для цен: сравнение оплаты с mint_price
строгое, поэтому любая погрешность округления недопустима.
"""

from decimal import Decimal, InvalidOperation
from typing import Final, Union

from echoes.core.errors import InvalidPrice


WEI_PER_ETHER: Final[int] = 10**18

# Количество знаков после запятой в ether
ETHER_DECIMALS: Final[int] = 18


def parse_ether(value: Union[str, int, Decimal]) -> int:
    """
    Конверсия: ether → wei

    Args:
        value: Сумма в ether ("0.01", 10, Decimal("1.5"))

    Returns:
        Сумма в wei (int)

    Raises:
        InvalidPrice: Если сумма отрицательная или точнее 1 wei
    """
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidPrice(value) from e

    wei = amount * WEI_PER_ETHER
    if wei != wei.to_integral_value():
        raise InvalidPrice(value)
    return validate_amount(int(wei))


def format_ether(wei: int) -> str:
    """
    Конверсия: wei → строка в ether без лишних нулей.

    Examples:
        >>> format_ether(10**16)
        '0.01'
        >>> format_ether(0)
        '0'
    """
    amount = Decimal(validate_amount(wei)) / WEI_PER_ETHER
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def validate_amount(amount: object) -> int:
    """
    Проверка суммы в wei.

    bool отклоняется явно: True/False — int в Python, но не сумма.

    Raises:
        InvalidPrice: Если сумма не int или отрицательная
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidPrice(amount)
    if amount < 0:
        raise InvalidPrice(amount)
    return amount
