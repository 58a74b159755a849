"""
Domain models and value objects.

Identifier, addresses, wei units, events, snapshots.
"""

from echoes.core.domain.address import (
    ADDRESS_SIZE,
    address_bytes,
    address_from_bytes,
    is_address,
    normalize_address,
    same_address,
    to_checksum_address,
)
from echoes.core.domain.events import (
    BaseURIUpdated,
    EchoCreated,
    Event,
    EventKind,
    OwnershipTransferred,
    PriceUpdated,
    Transfer,
)
from echoes.core.domain.identifier import (
    IDENTIFIER_SIZE,
    MAX_TEXT_BYTES,
    Identifier,
    as_identifier,
)
from echoes.core.domain.snapshots import EchoSnapshot, TokenHolding, TreeSnapshot
from echoes.core.domain.units import (
    ETHER_DECIMALS,
    WEI_PER_ETHER,
    format_ether,
    parse_ether,
    validate_amount,
)

__all__ = [
    # Address module
    "ADDRESS_SIZE",
    "address_bytes",
    "address_from_bytes",
    "is_address",
    "normalize_address",
    "same_address",
    "to_checksum_address",
    # Identifier
    "IDENTIFIER_SIZE",
    "MAX_TEXT_BYTES",
    "Identifier",
    "as_identifier",
    # Units
    "ETHER_DECIMALS",
    "WEI_PER_ETHER",
    "format_ether",
    "parse_ether",
    "validate_amount",
    # Events
    "Event",
    "EventKind",
    "EchoCreated",
    "Transfer",
    "PriceUpdated",
    "BaseURIUpdated",
    "OwnershipTransferred",
    # Snapshots
    "EchoSnapshot",
    "TokenHolding",
    "TreeSnapshot",
]
