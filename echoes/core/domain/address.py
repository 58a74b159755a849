"""
Address — 20-байтные адреса аккаунтов и коллекций

Адрес хранится и возвращается в mixed-case checksum форме (EIP-55 стиль,
nibble-хеш считается через SHA3-256). Для сравнений и для token URI
используется lowercase форма.

Единственный допустимый способ нормализации адресов — функции этого модуля.
"""

import hashlib
import re
from typing import Final

from echoes.core.errors import InvalidAddress


ADDRESS_SIZE: Final[int] = 20

_ADDRESS_RE: Final = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address(value: object) -> bool:
    """True если value — 0x-префиксированная строка из 40 hex-символов."""
    return isinstance(value, str) and bool(_ADDRESS_RE.match(value))


def to_checksum_address(value: str) -> str:
    """
    Конверсия адреса в checksum форму.

    Символ a-f пишется в верхнем регистре, если соответствующий nibble
    SHA3-256(lowercase hex) >= 8.

    Raises:
        InvalidAddress: Если value не адрес
    """
    if not is_address(value):
        raise InvalidAddress(f"not an address: {value!r}")

    body = value[2:].lower()
    digest = hashlib.sha3_256(body.encode("ascii")).hexdigest()

    out = []
    for char, nibble in zip(body, digest):
        if char.isalpha() and int(nibble, 16) >= 8:
            out.append(char.upper())
        else:
            out.append(char)
    return "0x" + "".join(out)


def address_from_bytes(raw: bytes) -> str:
    """Последние 20 байт → checksum адрес."""
    if len(raw) < ADDRESS_SIZE:
        raise InvalidAddress(f"need at least {ADDRESS_SIZE} bytes, got {len(raw)}")
    return to_checksum_address("0x" + raw[-ADDRESS_SIZE:].hex())


def address_bytes(value: str) -> bytes:
    """Checksum/lowercase адрес → 20 сырых байт."""
    if not is_address(value):
        raise InvalidAddress(f"not an address: {value!r}")
    return bytes.fromhex(value[2:])


def normalize_address(value: str) -> str:
    """
    Каноническая checksum форма для любого регистра.

    Используется на входе всех операций, принимающих адрес от caller'а,
    чтобы ключи balance_of не расходились по регистру.
    """
    return to_checksum_address(value)


def same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()
