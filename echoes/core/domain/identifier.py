"""
Identifier — 32-байтный ключ коллекции

Identifier непрозрачен: система сравнивает ключи побайтно и никак их не
интерпретирует. Для удобства есть два конструктора:
- from_text: короткий UTF-8 заголовок, дополненный нулями справа (bytes32 string)
- from_uuid: 16-байтный UUID, дополненный нулями слева до 32 байт
"""

import uuid
from typing import Final, Union

from pydantic import BaseModel, Field, field_validator

from echoes.core.errors import InvalidIdentifier


IDENTIFIER_SIZE: Final[int] = 32

# Последний байт зарезервирован под терминирующий ноль (bytes32 string)
MAX_TEXT_BYTES: Final[int] = IDENTIFIER_SIZE - 1


class Identifier(BaseModel):
    """
    Immutable 32-байтный identifier.

    Hashable (frozen=True), поэтому используется как ключ в mapping реестра.
    """

    raw: bytes = Field(..., strict=True, description="Ровно 32 байта")

    model_config = {"frozen": True}

    @field_validator("raw")
    @classmethod
    def validate_size(cls, v: bytes) -> bytes:
        if len(v) != IDENTIFIER_SIZE:
            raise ValueError(f"identifier must be {IDENTIFIER_SIZE} bytes, got {len(v)}")
        return v

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, value: bytes) -> "Identifier":
        if len(value) != IDENTIFIER_SIZE:
            raise InvalidIdentifier(
                f"identifier must be {IDENTIFIER_SIZE} bytes, got {len(value)}"
            )
        return cls(raw=bytes(value))

    @classmethod
    def from_text(cls, text: str) -> "Identifier":
        """
        Короткий текстовый заголовок → identifier.

        Args:
            text: Заголовок (не более 31 байта в UTF-8)

        Returns:
            Identifier с текстом, дополненным нулями справа

        Raises:
            InvalidIdentifier: Если текст слишком длинный
        """
        encoded = text.encode("utf-8")
        if len(encoded) > MAX_TEXT_BYTES:
            raise InvalidIdentifier(
                f"text identifier is {len(encoded)} bytes, maximum is {MAX_TEXT_BYTES}"
            )
        return cls(raw=encoded.ljust(IDENTIFIER_SIZE, b"\x00"))

    @classmethod
    def from_uuid(cls, value: Union[str, uuid.UUID]) -> "Identifier":
        """
        UUID → identifier (16 байт, нули слева).

        Args:
            value: UUID объектом или строкой ("11111111-1111-1111-8888-111111111111")
        """
        if not isinstance(value, uuid.UUID):
            try:
                value = uuid.UUID(str(value))
            except ValueError as e:
                raise InvalidIdentifier(f"invalid uuid {value!r}: {e}") from e
        return cls(raw=value.bytes.rjust(IDENTIFIER_SIZE, b"\x00"))

    @classmethod
    def from_hex(cls, value: str) -> "Identifier":
        body = value[2:] if value.startswith(("0x", "0X")) else value
        try:
            raw = bytes.fromhex(body)
        except ValueError as e:
            raise InvalidIdentifier(f"invalid hex identifier {value!r}") from e
        return cls.from_bytes(raw)

    # -------------------------------------------------------------------------
    # Представления
    # -------------------------------------------------------------------------

    @property
    def hex(self) -> str:
        """0x-префиксированный hex (64 символа)."""
        return "0x" + self.raw.hex()

    def as_text(self) -> str:
        """Обратная конверсия bytes32 string → str (нули справа отбрасываются)."""
        return self.raw.rstrip(b"\x00").decode("utf-8", errors="replace")

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.hex


def as_identifier(value: Union[Identifier, bytes]) -> Identifier:
    """Identifier или сырые 32 байта → Identifier."""
    if isinstance(value, Identifier):
        return value
    if isinstance(value, (bytes, bytearray)):
        return Identifier.from_bytes(bytes(value))
    raise InvalidIdentifier(f"expected Identifier or 32 bytes, got {type(value).__name__}")
