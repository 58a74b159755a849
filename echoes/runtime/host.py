"""Host — среда исполнения с атомарными сериализованными transitions.

Host гарантирует:
- Каждая изменяющая операция (create_echo, mint, update_price, set_base_uri,
  transfer_ownership) выполняется целиком под глобальным RLock
- События буферизуются и попадают в event log только при успешном commit
- Allocation table: адрес → размещённый объект (Tree или Echo)

Порядок между конкурентными caller'ами определяется порядком захвата lock;
event log отражает этот total order.
"""

import hashlib
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Union

from echoes.core.config import EchoesSettings, get_settings
from echoes.core.domain.address import address_bytes, address_from_bytes, normalize_address
from echoes.core.domain.events import Event, EventKind
from echoes.core.errors import UnknownEcho
from echoes.echo.collection import Echo
from echoes.oracle.address_oracle import EchoTemplate
from echoes.tree.registry import Tree


logger = logging.getLogger(__name__)


class Host:
    """In-process host: lock, event log, allocation table, аккаунты."""

    def __init__(self, settings: Optional[EchoesSettings] = None):
        self.settings = settings or get_settings()

        self._lock = threading.RLock()
        self._events: List[Event] = []
        self._pending: Optional[List[Event]] = None

        # lowercase address → Tree | Echo
        self._deployments: Dict[str, Union[Tree, Echo]] = {}
        # deployer → количество Tree, развёрнутых этим аккаунтом
        self._nonces: Dict[str, int] = {}

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    @property
    def lock(self) -> threading.RLock:
        """Глобальный lock для консистентных чтений (снапшоты)."""
        return self._lock

    @contextmanager
    def transition(self) -> Iterator[None]:
        """
        Атомарный transition.

        Вложенный вызов (тот же поток) присоединяется к внешнему transition:
        commit происходит только на самом внешнем уровне.
        """
        with self._lock:
            if self._pending is not None:
                yield
                return

            pending: List[Event] = []
            self._pending = pending
            try:
                yield
            finally:
                self._pending = None

            for event in pending:
                self._events.append(event.model_copy(update={"sequence": len(self._events)}))

    def emit(self, event: Event) -> None:
        """Буферизация события внутри текущего transition."""
        if self._pending is None:
            raise RuntimeError("emit() called outside of a transition")
        self._pending.append(event)

    def events(
        self,
        kind: Optional[EventKind] = None,
        emitter: Optional[str] = None,
    ) -> List[Event]:
        """Закоммиченные события, опционально отфильтрованные по типу и эмиттеру."""
        with self._lock:
            result = list(self._events)
        if kind is not None:
            result = [e for e in result if e.kind == kind]
        if emitter is not None:
            result = [e for e in result if e.emitter.lower() == emitter.lower()]
        return result

    # =========================================================================
    # ALLOCATION TABLE
    # =========================================================================

    def is_deployed(self, address: str) -> bool:
        return address.lower() in self._deployments

    def allocate(self, address: str, deployed: Union[Tree, Echo]) -> None:
        """
        Регистрация объекта по адресу.

        Вызывается только внутри transition, после всех проверок.
        """
        key = address.lower()
        if key in self._deployments:
            raise RuntimeError(f"address {address} already allocated")
        self._deployments[key] = deployed

    def echo_at_address(self, address: str) -> Echo:
        """
        Подключение к коллекции по адресу (аналог attach к контракту).

        Raises:
            UnknownEcho: Если по адресу нет Echo
        """
        deployed = self._deployments.get(normalize_address(address).lower())
        if deployed is None:
            raise UnknownEcho(address)
        if not isinstance(deployed, Echo):
            raise UnknownEcho(address, detail=f"{type(deployed).__name__} deployed there")
        return deployed

    # =========================================================================
    # ACCOUNTS / DEPLOYMENT
    # =========================================================================

    @staticmethod
    def account(label: str) -> str:
        """Детерминированный адрес аккаунта по метке ("author-a", "reader-b")."""
        return address_from_bytes(hashlib.sha3_256(b"account:" + label.encode("utf-8")).digest())

    def template(self) -> EchoTemplate:
        return EchoTemplate(
            name=self.settings.template_name,
            version=self.settings.template_version,
        )

    def deploy_tree(self, deployer: str, base_uri: Optional[str] = None) -> Tree:
        """
        Deploy Tree. Адрес выводится из (deployer, nonce), deployer становится admin.

        Args:
            deployer: Аккаунт, разворачивающий Tree
            base_uri: Начальный base URI (по умолчанию ECHOES_DEFAULT_BASE_URI)
        """
        deployer = normalize_address(deployer)
        with self.transition():
            nonce = self._nonces.get(deployer, 0)
            preimage = b"create:" + address_bytes(deployer) + nonce.to_bytes(8, "big")
            address = address_from_bytes(hashlib.sha3_256(preimage).digest())

            tree = Tree(host=self, address=address, admin=deployer, template=self.template())

            # base URI до allocate: при ошибке Tree не регистрируется, nonce не растёт
            initial = base_uri if base_uri is not None else self.settings.default_base_uri
            if initial:
                tree.set_base_uri(deployer, initial)

            self.allocate(address, tree)
            self._nonces[deployer] = nonce + 1

        logger.info(f"Deployed Tree at {address} (admin={deployer})")
        return tree
