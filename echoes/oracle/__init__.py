"""Address Oracle — детерминированная деривация адресов коллекций."""

from .address_oracle import (
    DEFAULT_TEMPLATE,
    AddressPrediction,
    EchoTemplate,
    derive_echo_address,
    predict,
)

__all__ = [
    "DEFAULT_TEMPLATE",
    "AddressPrediction",
    "EchoTemplate",
    "derive_echo_address",
    "predict",
]
