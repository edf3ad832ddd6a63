"""Pydantic v2 models for dynamic AMM pool configs and alpha vault configs."""

from enum import IntEnum

from pydantic import BaseModel, Field, model_validator

from meteora_pool_launcher.constants import SENTINEL_PUBKEY


class ActivationType(IntEnum):
    SLOT = 0
    TIMESTAMP = 1


class VaultMode(IntEnum):
    PRORATA = 0
    FCFS = 1


class PoolType(IntEnum):
    DLMM = 0
    DYNAMIC = 1


class PoolConfigRecord(BaseModel):
    """Decoded dynamic AMM Config account."""

    key: str
    activation_type: ActivationType
    activation_duration: int = Field(ge=0)
    vault_config_key: str = SENTINEL_PUBKEY
    pool_creator_authority: str = SENTINEL_PUBKEY
    trade_fee_numerator: int = 0
    trade_fee_denominator: int = 0
    protocol_trade_fee_numerator: int = 0
    protocol_trade_fee_denominator: int = 0
    partner_fee_numerator: int = 0

    model_config = {"frozen": True}

    @property
    def has_vault_support(self) -> bool:
        return self.vault_config_key != SENTINEL_PUBKEY


class VaultConfigRecord(BaseModel):
    """Decoded alpha vault FcfsConfig / ProrataConfig account."""

    key: str
    activation_type: ActivationType
    start_vesting_duration: int = Field(ge=0)
    end_vesting_duration: int = Field(ge=0)
    vault_mode: VaultMode = VaultMode.PRORATA
    max_buying_cap: int | None = None
    max_depositing_cap: int | None = None
    individual_depositing_cap: int | None = None
    depositing_duration_until_last_join_point: int | None = None
    escrow_fee: int = 0

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_vesting_order(self) -> "VaultConfigRecord":
        if self.end_vesting_duration < self.start_vesting_duration:
            raise ValueError(
                f"end_vesting_duration {self.end_vesting_duration} is before "
                f"start_vesting_duration {self.start_vesting_duration}"
            )
        return self

    @property
    def lock_duration(self) -> int:
        return self.start_vesting_duration

    @property
    def vesting_duration(self) -> int:
        return self.end_vesting_duration - self.start_vesting_duration


class Requirement(BaseModel):
    """Caller constraints used to pick a pool config."""

    activation_type: ActivationType
    maximum_activation_duration: int
    minimum_lock_duration: int
    maximum_lock_duration: int
    minimum_vesting_duration: int
    maximum_vesting_duration: int
    vault_mode: VaultMode

    model_config = {"frozen": True}


class ConfigMatch(BaseModel):
    """A selected pool config together with the vault config it links to."""

    pool: PoolConfigRecord
    vault: VaultConfigRecord

    model_config = {"frozen": True}


class Clock(BaseModel):
    """Decoded Clock sysvar."""

    slot: int
    epoch_start_timestamp: int
    epoch: int
    leader_schedule_epoch: int
    unix_timestamp: int

    model_config = {"frozen": True}


class CreatedPool(BaseModel):
    pool_address: str
    signatures: list[str] = []


class LaunchResult(BaseModel):
    """Everything produced by one pool + vault launch."""

    match: ConfigMatch
    activation_point: int
    pool_address: str
    pool_signatures: list[str]
    vault_signature: str
