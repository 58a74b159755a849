"""Address Oracle — детерминированный адрес коллекции до её создания.

Адрес зависит только от (registry address, identifier, template):

    sha3_256(0xff ‖ registry(20) ‖ identifier(32) ‖ sha3_256(template.code))[12:]

Любая сторона может вычислить адрес будущей коллекции заранее и ссылаться
на него во внешних системах. Tree использует ту же функцию при создании,
поэтому предсказанный и фактический адреса всегда совпадают.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Callable, Final

from echoes.core.domain.address import address_bytes, address_from_bytes
from echoes.core.domain.identifier import Identifier


logger = logging.getLogger(__name__)

# Префикс, отделяющий детерминированные адреса от адресов аккаунтов
DERIVATION_PREFIX: Final[bytes] = b"\xff"


@dataclass(frozen=True)
class EchoTemplate:
    """Шаблон коллекции. Хеш code играет роль init code hash."""

    name: str = "Echo"
    version: str = "1"

    @property
    def code(self) -> bytes:
        return f"{self.name}@{self.version}".encode("utf-8")

    @property
    def code_hash(self) -> bytes:
        return hashlib.sha3_256(self.code).digest()


DEFAULT_TEMPLATE: Final[EchoTemplate] = EchoTemplate()


@dataclass(frozen=True)
class AddressPrediction:
    """Результат predict."""

    echo_address: str
    already_published: bool

    # Распаковка как (address, published) кортежа
    def __iter__(self):
        yield self.echo_address
        yield self.already_published


def derive_echo_address(
    registry_address: str,
    identifier: Identifier,
    template: EchoTemplate = DEFAULT_TEMPLATE,
) -> str:
    """
    Чистая функция деривации адреса.

    Args:
        registry_address: Адрес Tree
        identifier: 32-байтный ключ коллекции
        template: Шаблон коллекции

    Returns:
        Checksum адрес коллекции
    """
    preimage = (
        DERIVATION_PREFIX
        + address_bytes(registry_address)
        + bytes(identifier)
        + template.code_hash
    )
    return address_from_bytes(hashlib.sha3_256(preimage).digest())


def predict(
    registry_address: str,
    identifier: Identifier,
    is_published: Callable[[Identifier], bool],
    template: EchoTemplate = DEFAULT_TEMPLATE,
) -> AddressPrediction:
    """
    Предсказание адреса + флаг публикации.

    is_published — единственное stateful чтение; сама деривация
    от состояния не зависит.
    """
    echo_address = derive_echo_address(registry_address, identifier, template)
    published = is_published(identifier)
    logger.debug(
        f"Predicted {echo_address} for identifier {identifier.hex} (published={published})"
    )
    return AddressPrediction(echo_address=echo_address, already_published=published)
