"""
config_fetcher.py

Fetch dynamic AMM pool configs, alpha vault configs and the Clock sysvar
from a Solana RPC node and decode them into records.

Usage:
    from meteora_pool_launcher.pools.config_fetcher import RpcLedgerQueryService

    ledger = RpcLedgerQueryService()
    public_configs = ledger.fetch_pool_configs(SENTINEL_PUBKEY)
    vault_configs = ledger.fetch_vault_configs(VaultMode.PRORATA)
"""

from typing import Protocol

from meteora_pool_launcher.auto_config.logging_config import logging_config
from meteora_pool_launcher.constants import (
    ALPHA_VAULT_PROGRAM_ID,
    DYNAMIC_AMM_PROGRAM_ID,
    POOL_CREATOR_AUTHORITY_OFFSET,
    SYSVAR_CLOCK_PUBKEY,
)
from meteora_pool_launcher.pools.account_layouts import (
    POOL_CONFIG_DISCRIMINATOR,
    VAULT_CONFIG_DISCRIMINATORS,
    decode_clock,
    decode_pool_config,
    decode_pubkey,
    decode_vault_config,
)
from meteora_pool_launcher.pools.errors import LedgerQueryError, MalformedRecordError
from meteora_pool_launcher.pools.models import Clock, PoolConfigRecord, VaultConfigRecord, VaultMode
from meteora_pool_launcher.utils import solana_rpc
from meteora_pool_launcher.utils.solana_rpc import memcmp_filter

logger = logging_config.get_logger(__name__)


class LedgerQueryService(Protocol):
    def fetch_pool_configs(self, scope_key: str) -> list[PoolConfigRecord]: ...

    def fetch_vault_configs(self, vault_mode: VaultMode) -> list[VaultConfigRecord]: ...

    def fetch_clock(self) -> Clock: ...


def _decode_accounts(accounts, decode, label):
    """Decode (pubkey, data) pairs, dropping malformed accounts."""
    records = []
    for pubkey, data in accounts:
        try:
            records.append(decode(pubkey, data))
        except MalformedRecordError as e:
            logger.warning(f"Rejected malformed {label} account {pubkey}: {e}")
    return records


class RpcLedgerQueryService:
    """LedgerQueryService backed by JSON-RPC getProgramAccounts / getAccountInfo."""

    def __init__(self, amm_program_id: str = DYNAMIC_AMM_PROGRAM_ID, vault_program_id: str = ALPHA_VAULT_PROGRAM_ID):
        self.amm_program_id = amm_program_id
        self.vault_program_id = vault_program_id

    def fetch_pool_configs(self, scope_key: str) -> list[PoolConfigRecord]:
        """
        Pool configs whose pool_creator_authority equals scope_key. The default
        (sentinel) key selects the public configs anyone can use.

        Raises:
            LedgerQueryError: If the RPC request failed.
        """
        filters = [
            memcmp_filter(0, POOL_CONFIG_DISCRIMINATOR),
            memcmp_filter(POOL_CREATOR_AUTHORITY_OFFSET, decode_pubkey(scope_key)),
        ]
        accounts = solana_rpc.get_program_accounts(self.amm_program_id, filters)
        if accounts is None:
            raise LedgerQueryError(f"Could not fetch pool configs for scope {scope_key}")

        records = _decode_accounts(accounts, decode_pool_config, "pool config")
        logger.info(f"Fetched {len(records)} pool configs for scope {scope_key}")
        return records

    def fetch_vault_configs(self, vault_mode: VaultMode) -> list[VaultConfigRecord]:
        """
        All alpha vault configs of the given mode.

        Raises:
            LedgerQueryError: If the RPC request failed.
        """
        filters = [memcmp_filter(0, VAULT_CONFIG_DISCRIMINATORS[vault_mode])]
        accounts = solana_rpc.get_program_accounts(self.vault_program_id, filters)
        if accounts is None:
            raise LedgerQueryError(f"Could not fetch {vault_mode.name} vault configs")

        records = _decode_accounts(
            accounts,
            lambda pubkey, data: decode_vault_config(pubkey, data, vault_mode),
            f"{vault_mode.name} vault config",
        )
        logger.info(f"Fetched {len(records)} {vault_mode.name} vault configs")
        return records

    def fetch_clock(self) -> Clock:
        data = solana_rpc.get_account_info(SYSVAR_CLOCK_PUBKEY)
        if data is None:
            raise LedgerQueryError("Could not fetch the Clock sysvar")
        return decode_clock(data)
