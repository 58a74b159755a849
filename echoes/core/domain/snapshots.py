"""
Snapshots — Снапшоты состояния Tree и Echo

Immutable Pydantic модели, полностью совместимые с JSON Schema
(echoes/core/contracts/schema/*.json). Снапшот — read-only копия,
изменения в живом объекте на него не влияют.
"""

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# NESTED MODELS
# =============================================================================


class TokenHolding(BaseModel):
    """Владелец одного токена."""

    token_id: int = Field(..., ge=0)
    owner: str = Field(..., min_length=42, max_length=42)

    model_config = {"frozen": True}


# =============================================================================
# ECHO SNAPSHOT
# =============================================================================


class EchoSnapshot(BaseModel):
    """
    Снапшот одной коллекции.

    Инварианты:
    - 2 <= total_supply <= max_supply
    - tokens покрывает ровно [0, total_supply) в порядке id
    """

    address: str = Field(..., min_length=42, max_length=42)
    identifier: str = Field(..., pattern="^0x[0-9a-f]{64}$")
    tree: str = Field(..., min_length=42, max_length=42)
    owner: str = Field(..., min_length=42, max_length=42)
    mint_price: int = Field(..., ge=0, description="Цена в wei")
    max_supply: int = Field(..., ge=2)
    total_supply: int = Field(..., ge=2)
    exhausted: bool
    tokens: list[TokenHolding] = Field(default_factory=list)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_supply(self) -> "EchoSnapshot":
        if self.total_supply > self.max_supply:
            raise ValueError(
                f"total_supply {self.total_supply} exceeds max_supply {self.max_supply}"
            )
        ids = [t.token_id for t in self.tokens]
        if ids != list(range(self.total_supply)):
            raise ValueError("tokens must cover [0, total_supply) contiguously")
        if self.exhausted != (self.total_supply == self.max_supply):
            raise ValueError("exhausted flag inconsistent with supply")
        return self


# =============================================================================
# TREE SNAPSHOT
# =============================================================================


class TreeSnapshot(BaseModel):
    """Снапшот реестра: base URI, admin и коллекции в порядке создания."""

    address: str = Field(..., min_length=42, max_length=42)
    admin: str = Field(..., min_length=42, max_length=42)
    base_uri: str
    echo_count: int = Field(..., ge=0)
    echoes: list[EchoSnapshot] = Field(default_factory=list)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_count(self) -> "TreeSnapshot":
        if self.echo_count != len(self.echoes):
            raise ValueError(
                f"echo_count {self.echo_count} != len(echoes) {len(self.echoes)}"
            )
        return self
