"""
Tree of Echoes — реестр коллекций с детерминированными адресами.

Создатели публикуют коллекции (Echo) с ограниченным supply под общим
реестром (Tree). Адрес коллекции вычисляется до её создания и совпадает
с фактическим адресом после create_echo.
"""

from echoes.core.config import EchoesSettings, configure_logging, get_settings
from echoes.core.domain import Identifier, parse_ether
from echoes.echo import Echo, EchoPhase
from echoes.oracle import AddressPrediction, EchoTemplate
from echoes.runtime import Host
from echoes.tree import Tree

__all__ = [
    "AddressPrediction",
    "Echo",
    "EchoPhase",
    "EchoTemplate",
    "EchoesSettings",
    "Host",
    "Identifier",
    "Tree",
    "configure_logging",
    "get_settings",
    "parse_ether",
]
