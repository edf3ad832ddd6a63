"""
account_layouts.py

Decoders for the on-chain accounts the launcher reads:

    Config          dynamic AMM pool config
    ProrataConfig   alpha vault config, pro rata mode
    FcfsConfig      alpha vault config, first come first served mode
    Clock           sysvar

Anchor accounts begin with an 8 byte discriminator, sha256("account:<Name>")[:8].
All integers are little endian.
"""

import hashlib
import struct

import base58
from pydantic import ValidationError

from meteora_pool_launcher.pools.errors import MalformedRecordError
from meteora_pool_launcher.pools.models import (
    ActivationType,
    Clock,
    PoolConfigRecord,
    VaultConfigRecord,
    VaultMode,
)

DISCRIMINATOR_SIZE = 8

# pool_fees (4 x u64), activation_duration, vault_config_key,
# pool_creator_authority, activation_type, partner_fee_numerator
POOL_CONFIG_LAYOUT = struct.Struct("<QQQQQ32s32sBQ")
# max_buying_cap, start_vesting_duration, end_vesting_duration, escrow_fee, activation_type
PRORATA_CONFIG_LAYOUT = struct.Struct("<QQQQB")
# max_depositing_cap, start_vesting_duration, end_vesting_duration,
# depositing_duration_until_last_join_point, individual_depositing_cap, escrow_fee, activation_type
FCFS_CONFIG_LAYOUT = struct.Struct("<QQQQQQB")
# slot, epoch_start_timestamp, epoch, leader_schedule_epoch, unix_timestamp
CLOCK_LAYOUT = struct.Struct("<QqQQq")


def account_discriminator(account_name: str) -> bytes:
    return hashlib.sha256(f"account:{account_name}".encode()).digest()[:DISCRIMINATOR_SIZE]


POOL_CONFIG_DISCRIMINATOR = account_discriminator("Config")
PRORATA_CONFIG_DISCRIMINATOR = account_discriminator("ProrataConfig")
FCFS_CONFIG_DISCRIMINATOR = account_discriminator("FcfsConfig")

VAULT_CONFIG_DISCRIMINATORS = {
    VaultMode.PRORATA: PRORATA_CONFIG_DISCRIMINATOR,
    VaultMode.FCFS: FCFS_CONFIG_DISCRIMINATOR,
}


def encode_pubkey(raw: bytes) -> str:
    return base58.b58encode(raw).decode("ascii")


def decode_pubkey(address: str) -> bytes:
    raw = base58.b58decode(address)
    if len(raw) != 32:
        raise ValueError(f"{address} is not a 32 byte public key")
    return raw


def _unpack_anchor_account(key, data, discriminator, layout, account_name):
    if len(data) < DISCRIMINATOR_SIZE + layout.size:
        raise MalformedRecordError(
            f"{account_name} {key}: expected at least {DISCRIMINATOR_SIZE + layout.size} bytes, got {len(data)}"
        )
    if data[:DISCRIMINATOR_SIZE] != discriminator:
        raise MalformedRecordError(f"{key} is not a {account_name} account")
    return layout.unpack_from(data, DISCRIMINATOR_SIZE)


def _activation_type(key, value):
    try:
        return ActivationType(value)
    except ValueError as e:
        raise MalformedRecordError(f"{key}: unknown activation type {value}") from e


def decode_pool_config(key: str, data: bytes) -> PoolConfigRecord:
    (
        trade_fee_numerator,
        trade_fee_denominator,
        protocol_trade_fee_numerator,
        protocol_trade_fee_denominator,
        activation_duration,
        vault_config_key,
        pool_creator_authority,
        activation_type,
        partner_fee_numerator,
    ) = _unpack_anchor_account(key, data, POOL_CONFIG_DISCRIMINATOR, POOL_CONFIG_LAYOUT, "Config")

    return PoolConfigRecord(
        key=key,
        activation_type=_activation_type(key, activation_type),
        activation_duration=activation_duration,
        vault_config_key=encode_pubkey(vault_config_key),
        pool_creator_authority=encode_pubkey(pool_creator_authority),
        trade_fee_numerator=trade_fee_numerator,
        trade_fee_denominator=trade_fee_denominator,
        protocol_trade_fee_numerator=protocol_trade_fee_numerator,
        protocol_trade_fee_denominator=protocol_trade_fee_denominator,
        partner_fee_numerator=partner_fee_numerator,
    )


def decode_vault_config(key: str, data: bytes, vault_mode: VaultMode) -> VaultConfigRecord:
    """
    Decode an alpha vault config account of the given mode.

    Raises:
        MalformedRecordError: On short data, a foreign discriminator, an unknown
            activation type or an end vesting duration before the start.
    """
    if vault_mode == VaultMode.PRORATA:
        (
            max_buying_cap,
            start_vesting_duration,
            end_vesting_duration,
            escrow_fee,
            activation_type,
        ) = _unpack_anchor_account(key, data, PRORATA_CONFIG_DISCRIMINATOR, PRORATA_CONFIG_LAYOUT, "ProrataConfig")
        fields = {"max_buying_cap": max_buying_cap}
    else:
        (
            max_depositing_cap,
            start_vesting_duration,
            end_vesting_duration,
            depositing_duration_until_last_join_point,
            individual_depositing_cap,
            escrow_fee,
            activation_type,
        ) = _unpack_anchor_account(key, data, FCFS_CONFIG_DISCRIMINATOR, FCFS_CONFIG_LAYOUT, "FcfsConfig")
        fields = {
            "max_depositing_cap": max_depositing_cap,
            "depositing_duration_until_last_join_point": depositing_duration_until_last_join_point,
            "individual_depositing_cap": individual_depositing_cap,
        }

    try:
        return VaultConfigRecord(
            key=key,
            activation_type=_activation_type(key, activation_type),
            start_vesting_duration=start_vesting_duration,
            end_vesting_duration=end_vesting_duration,
            vault_mode=vault_mode,
            escrow_fee=escrow_fee,
            **fields,
        )
    except ValidationError as e:
        raise MalformedRecordError(f"Vault config {key}: {e}") from e


def decode_clock(data: bytes) -> Clock:
    if len(data) < CLOCK_LAYOUT.size:
        raise MalformedRecordError(f"Clock sysvar: expected {CLOCK_LAYOUT.size} bytes, got {len(data)}")
    slot, epoch_start_timestamp, epoch, leader_schedule_epoch, unix_timestamp = CLOCK_LAYOUT.unpack_from(data)
    return Clock(
        slot=slot,
        epoch_start_timestamp=epoch_start_timestamp,
        epoch=epoch,
        leader_schedule_epoch=leader_schedule_epoch,
        unix_timestamp=unix_timestamp,
    )
