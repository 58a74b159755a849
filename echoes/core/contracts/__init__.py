"""
Contract Validation Module

Валидация JSON снапшотов Tree of Echoes.
"""

from .validators import (
    ContractValidator,
    EchoSnapshotValidator,
    SchemaLoader,
    TreeSnapshotValidator,
    validate_echo_snapshot,
    validate_tree_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EchoSnapshotValidator",
    "TreeSnapshotValidator",
    # Functions
    "validate_echo_snapshot",
    "validate_tree_snapshot",
]
