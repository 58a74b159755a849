"""Echo — ledger отдельной коллекции (mint, цена, supply cap)."""

from .collection import PRESEEDED_TOKENS, Echo, EchoPhase

__all__ = [
    "PRESEEDED_TOKENS",
    "Echo",
    "EchoPhase",
]
