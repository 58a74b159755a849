"""Echo — коллекция токенов одного identifier.

Ledger коллекции: owner, цена, supply cap, владельцы токенов, балансы.

Фаза не хранится явно, а выводится из (total_supply, max_supply):
- OPEN: total_supply < max_supply, mint разрешён
- EXHAUSTED: total_supply == max_supply, терминальное состояние

Нумерация фиксирована: при создании token 0 получает creator,
token 1 получает Tree. Поэтому max_supply >= 2 и total_supply стартует с 2.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, Final

from echoes.core.domain.address import normalize_address, same_address
from echoes.core.domain.events import OwnershipTransferred, PriceUpdated, Transfer
from echoes.core.domain.identifier import Identifier
from echoes.core.domain.snapshots import EchoSnapshot, TokenHolding
from echoes.core.domain.units import validate_amount
from echoes.core.errors import (
    InvalidIndex,
    InvalidSupply,
    PriceMismatch,
    SupplyExhausted,
    Unauthorized,
)
from echoes.core.uri import token_uri

if TYPE_CHECKING:
    from echoes.runtime.host import Host
    from echoes.tree.registry import Tree


logger = logging.getLogger(__name__)

# token 0 → creator, token 1 → Tree
PRESEEDED_TOKENS: Final[int] = 2


class EchoPhase(str, Enum):
    """Эффективный режим коллекции"""

    OPEN = "open"
    EXHAUSTED = "exhausted"


class Echo:
    """
    Коллекция с capped supply и изменяемой ценой.

    Создаётся только Tree.create_echo внутри host transition.
    Все проверки выполняются до первой записи в состояние.
    """

    def __init__(
        self,
        host: "Host",
        tree: "Tree",
        address: str,
        identifier: Identifier,
        owner: str,
        mint_price: int,
        max_supply: int,
    ):
        """
        Args:
            host: Среда исполнения (lock + event log)
            tree: Реестр, создавший коллекцию
            address: Детерминированный адрес (из AddressOracle)
            identifier: Ключ коллекции
            owner: Creator
            mint_price: Цена mint в wei (0 = бесплатно)
            max_supply: Максимум токенов, включая два предварительно выпущенных

        Raises:
            InvalidPrice: Цена отрицательная или не int
            InvalidSupply: max_supply < 2
        """
        mint_price = validate_amount(mint_price)
        if isinstance(max_supply, bool) or not isinstance(max_supply, int):
            raise InvalidSupply(max_supply, PRESEEDED_TOKENS)
        if max_supply < PRESEEDED_TOKENS:
            raise InvalidSupply(max_supply, PRESEEDED_TOKENS)

        self._host = host
        self._tree = tree
        self._address = normalize_address(address)
        self._identifier = identifier
        self._owner = normalize_address(owner)
        self._mint_price = mint_price
        self._max_supply = max_supply

        self._token_owner: Dict[int, str] = {}
        self._balances: Dict[str, int] = {}

        self._issue(self._owner)
        self._issue(tree.address)

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    @property
    def address(self) -> str:
        return self._address

    @property
    def identifier(self) -> Identifier:
        return self._identifier

    @property
    def tree(self) -> "Tree":
        return self._tree

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def mint_price(self) -> int:
        return self._mint_price

    @property
    def max_supply(self) -> int:
        return self._max_supply

    @property
    def total_supply(self) -> int:
        return len(self._token_owner)

    @property
    def phase(self) -> EchoPhase:
        if self.total_supply < self._max_supply:
            return EchoPhase.OPEN
        return EchoPhase.EXHAUSTED

    @property
    def remaining_supply(self) -> int:
        return self._max_supply - self.total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def owner_of(self, token_id: int) -> str:
        """
        Raises:
            InvalidIndex: Токен не выпущен
        """
        self._require_token(token_id)
        return self._token_owner[token_id]

    def token_uri(self, token_id: int) -> str:
        """
        URI метаданных токена.

        base_uri читается из Tree в момент вызова: смена base URI
        ретроактивна для всех уже выпущенных токенов.

        Raises:
            InvalidIndex: token_id вне [0, total_supply)
        """
        self._require_token(token_id)
        return token_uri(self._tree.base_uri, self._address, token_id)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def mint(self, caller: str, value: int = 0) -> int:
        """
        Публичный mint следующего токена.

        Args:
            caller: Получатель токена
            value: Оплата в wei; должна точно равняться mint_price

        Returns:
            Номер нового токена

        Raises:
            SupplyExhausted: Коллекция исчерпана
            PriceMismatch: value != mint_price
        """
        caller = normalize_address(caller)
        with self._host.transition():
            if self.total_supply >= self._max_supply:
                raise SupplyExhausted(self._max_supply)
            if isinstance(value, bool) or not isinstance(value, int) or value != self._mint_price:
                raise PriceMismatch(expected=self._mint_price, received=value)

            token_id = self._issue(caller)

        logger.debug(f"Minted token {token_id} of {self._address} to {caller}")
        return token_id

    def update_price(self, caller: str, new_price: int) -> None:
        """
        Смена цены (только owner). Действует немедленно для всех следующих mint.

        Raises:
            Unauthorized: caller не owner
            InvalidPrice: Цена отрицательная
        """
        with self._host.transition():
            self._require_owner(caller, "update_price")
            new_price = validate_amount(new_price)

            old_price = self._mint_price
            self._mint_price = new_price
            self._host.emit(
                PriceUpdated(emitter=self._address, old_price=old_price, new_price=new_price)
            )

        logger.info(f"Price of {self._address} updated: {old_price} -> {new_price} wei")

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """
        Передача прав owner. Токены не передаются.

        Raises:
            Unauthorized: caller не owner
        """
        new_owner = normalize_address(new_owner)
        with self._host.transition():
            self._require_owner(caller, "transfer_ownership")
            previous = self._owner
            self._owner = new_owner
            self._host.emit(
                OwnershipTransferred(
                    emitter=self._address, previous_owner=previous, new_owner=new_owner
                )
            )

        logger.info(f"Ownership of {self._address} transferred: {previous} -> {new_owner}")

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    def snapshot(self) -> EchoSnapshot:
        with self._host.lock:
            return EchoSnapshot(
                address=self._address,
                identifier=self._identifier.hex,
                tree=self._tree.address,
                owner=self._owner,
                mint_price=self._mint_price,
                max_supply=self._max_supply,
                total_supply=self.total_supply,
                exhausted=self.phase == EchoPhase.EXHAUSTED,
                tokens=[
                    TokenHolding(token_id=token_id, owner=holder)
                    for token_id, holder in sorted(self._token_owner.items())
                ],
            )

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _issue(self, recipient: str) -> int:
        # Следующий id всегда равен total_supply: диапазон [0, total_supply) непрерывен
        token_id = len(self._token_owner)
        self._token_owner[token_id] = recipient
        self._balances[recipient] = self._balances.get(recipient, 0) + 1
        self._host.emit(
            Transfer(emitter=self._address, from_address=None, to_address=recipient, token_id=token_id)
        )
        return token_id

    def _require_owner(self, caller: str, operation: str) -> None:
        if not same_address(caller, self._owner):
            raise Unauthorized(caller=caller, required="owner", operation=operation)

    def _require_token(self, token_id: int) -> None:
        if isinstance(token_id, bool) or not isinstance(token_id, int):
            raise InvalidIndex(token_id, self.total_supply, what="token_id")
        if token_id < 0 or token_id >= self.total_supply:
            raise InvalidIndex(token_id, self.total_supply, what="token_id")

    def __repr__(self) -> str:
        return (
            f"Echo(address={self._address}, identifier={self._identifier.hex}, "
            f"supply={self.total_supply}/{self._max_supply}, price={self._mint_price})"
        )
