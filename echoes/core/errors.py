"""
Errors — Таксономия ошибок Tree of Echoes

Каждая ошибка прерывает операцию целиком: состояние не меняется,
событие не попадает в лог. Восстановление и retry — ответственность caller'а.
"""

from typing import Optional


class EchoesError(Exception):
    """Базовый класс всех ошибок Tree of Echoes."""


# =============================================================================
# REGISTRY (TREE)
# =============================================================================


class DuplicateIdentifier(EchoesError):
    """create_echo вызван с уже опубликованным identifier."""

    def __init__(self, identifier_hex: str, existing_address: str):
        self.identifier_hex = identifier_hex
        self.existing_address = existing_address
        super().__init__(
            f"Identifier {identifier_hex} already published at {existing_address}"
        )


class InvalidIndex(EchoesError, IndexError):
    """Индекс (echo_at / token_uri) вне допустимого диапазона."""

    def __init__(self, index: int, length: int, what: str = "index"):
        self.index = index
        self.length = length
        super().__init__(f"{what} {index} out of range [0, {length})")


class Unauthorized(EchoesError):
    """Привилегированная операция вызвана не владельцем."""

    def __init__(self, caller: str, required: str, operation: str):
        self.caller = caller
        self.required = required
        self.operation = operation
        super().__init__(f"{operation}: caller {caller} is not {required}")


# =============================================================================
# COLLECTION (ECHO)
# =============================================================================


class SupplyExhausted(EchoesError):
    """mint при total_supply == max_supply."""

    def __init__(self, max_supply: int):
        self.max_supply = max_supply
        super().__init__(f"Supply exhausted: all {max_supply} tokens minted")


class PriceMismatch(EchoesError):
    """Сумма оплаты не совпадает с mint_price (требуется точное равенство)."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"Price mismatch: expected {expected} wei, received {received} wei")


class InvalidSupply(EchoesError, ValueError):
    """max_supply меньше числа предварительно выпущенных токенов."""

    def __init__(self, max_supply: int, minimum: int):
        self.max_supply = max_supply
        self.minimum = minimum
        super().__init__(f"max_supply {max_supply} below minimum {minimum}")


class InvalidPrice(EchoesError, ValueError):
    """Отрицательная или нецелая цена."""

    def __init__(self, price: object):
        self.price = price
        super().__init__(f"Invalid price: {price!r} (must be a non-negative integer amount of wei)")


# =============================================================================
# VALUE TYPES / HOST
# =============================================================================


class InvalidIdentifier(EchoesError, ValueError):
    """Identifier не является 32-байтным ключом."""


class InvalidAddress(EchoesError, ValueError):
    """Строка не является 20-байтным hex-адресом."""


class InvalidBaseURI(EchoesError, ValueError):
    """Base URI не является строкой."""

    def __init__(self, base_uri: object):
        self.base_uri = base_uri
        super().__init__(f"Invalid base URI: {base_uri!r} (must be a string)")


class UnknownEcho(EchoesError, LookupError):
    """По адресу ничего не размещено в host allocation table."""

    def __init__(self, address: str, detail: Optional[str] = None):
        self.address = address
        message = f"No echo deployed at {address}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
