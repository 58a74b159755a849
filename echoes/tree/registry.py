"""Tree — реестр identifier → Echo.

Create-and-seed протокол (create_echo), атомарный:
1. Проверка уникальности identifier (DuplicateIdentifier)
2. Адрес из AddressOracle — та же функция, что и predict_echo_address
3. Конструктор Echo валидирует цену/supply и выпускает token 0 → creator,
   token 1 → Tree
4. Запись mapping, append в ordered, регистрация в host allocation table
5. Событие EchoCreated

Любая ошибка на шагах 1-3 не оставляет следов: записи выполняются только
после успешного конструирования Echo, события коммитятся host'ом.
"""

import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from echoes.core.domain.address import normalize_address, same_address
from echoes.core.domain.events import BaseURIUpdated, EchoCreated
from echoes.core.domain.identifier import Identifier, as_identifier
from echoes.core.domain.snapshots import TreeSnapshot
from echoes.core.errors import (
    DuplicateIdentifier,
    InvalidBaseURI,
    InvalidIndex,
    Unauthorized,
)
from echoes.echo.collection import Echo
from echoes.oracle.address_oracle import (
    DEFAULT_TEMPLATE,
    AddressPrediction,
    EchoTemplate,
    predict,
)

if TYPE_CHECKING:
    from echoes.runtime.host import Host


logger = logging.getLogger(__name__)


class Tree:
    """
    Реестр коллекций.

    Один долгоживущий экземпляр на host; передаётся явно всему коду,
    который создаёт или перечисляет коллекции.
    """

    def __init__(
        self,
        host: "Host",
        address: str,
        admin: str,
        template: EchoTemplate = DEFAULT_TEMPLATE,
    ):
        self._host = host
        self._address = normalize_address(address)
        self._admin = normalize_address(admin)
        self._template = template
        self._base_uri = ""

        self._by_identifier: Dict[Identifier, Echo] = {}
        self._ordered: List[Echo] = []

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    @property
    def address(self) -> str:
        return self._address

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def template(self) -> EchoTemplate:
        return self._template

    @property
    def base_uri(self) -> str:
        return self._base_uri

    def echo_count(self) -> int:
        return len(self._ordered)

    def echo_at(self, index: int) -> str:
        """
        Адрес коллекции по индексу создания.

        Raises:
            InvalidIndex: index вне [0, echo_count())
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndex(index, self.echo_count(), what="echo index")
        if index < 0 or index >= len(self._ordered):
            raise InvalidIndex(index, len(self._ordered), what="echo index")
        return self._ordered[index].address

    def echo(self, identifier: Identifier) -> Optional[Echo]:
        """Коллекция по identifier или None."""
        return self._by_identifier.get(as_identifier(identifier))

    def echoes(self) -> Iterator[Echo]:
        """Коллекции в порядке создания."""
        return iter(list(self._ordered))

    def is_published(self, identifier: Identifier) -> bool:
        return as_identifier(identifier) in self._by_identifier

    def predict_echo_address(self, identifier: Identifier) -> AddressPrediction:
        """
        Адрес, по которому будет (или уже была) создана коллекция.

        Без побочных эффектов; результат стабилен до и после create_echo.
        """
        return predict(
            self._address, as_identifier(identifier), self.is_published, self._template
        )

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def create_echo(
        self,
        caller: str,
        identifier: Identifier,
        price: int,
        max_supply: int,
    ) -> str:
        """
        Публикация новой коллекции.

        Args:
            caller: Creator; становится owner и получает token 0
            identifier: Уникальный 32-байтный ключ
            price: Цена mint в wei
            max_supply: Максимум токенов (>= 2)

        Returns:
            Адрес созданной коллекции (совпадает с predict_echo_address)

        Raises:
            DuplicateIdentifier: identifier уже опубликован
            InvalidPrice / InvalidSupply: из конструктора Echo
        """
        creator = normalize_address(caller)
        identifier = as_identifier(identifier)
        with self._host.transition():
            existing = self._by_identifier.get(identifier)
            if existing is not None:
                raise DuplicateIdentifier(identifier.hex, existing.address)

            prediction = self.predict_echo_address(identifier)
            echo = Echo(
                host=self._host,
                tree=self,
                address=prediction.echo_address,
                identifier=identifier,
                owner=creator,
                mint_price=price,
                max_supply=max_supply,
            )

            self._host.allocate(echo.address, echo)
            self._by_identifier[identifier] = echo
            self._ordered.append(echo)
            self._host.emit(
                EchoCreated(
                    emitter=self._address,
                    identifier=identifier.hex,
                    echo_address=echo.address,
                    owner=creator,
                )
            )

        logger.info(
            f"Created echo #{len(self._ordered) - 1} at {echo.address} "
            f"(identifier={identifier.hex}, owner={creator}, price={echo.mint_price}, "
            f"max_supply={echo.max_supply})"
        )
        return echo.address

    def set_base_uri(self, caller: str, new_base_uri: str) -> None:
        """
        Замена base URI (только admin). Ретроактивна для всех коллекций.

        Raises:
            Unauthorized: caller не admin
            InvalidBaseURI: new_base_uri не строка
        """
        with self._host.transition():
            if not same_address(caller, self._admin):
                raise Unauthorized(caller=caller, required="admin", operation="set_base_uri")
            if not isinstance(new_base_uri, str):
                raise InvalidBaseURI(new_base_uri)

            event = BaseURIUpdated(emitter=self._address, base_uri=new_base_uri)
            self._base_uri = new_base_uri
            self._host.emit(event)

        logger.info(f"Base URI of Tree {self._address} set to {new_base_uri!r}")

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    def snapshot(self) -> TreeSnapshot:
        with self._host.lock:
            return TreeSnapshot(
                address=self._address,
                admin=self._admin,
                base_uri=self._base_uri,
                echo_count=len(self._ordered),
                echoes=[echo.snapshot() for echo in self._ordered],
            )

    def __repr__(self) -> str:
        return f"Tree(address={self._address}, echoes={len(self._ordered)})"
