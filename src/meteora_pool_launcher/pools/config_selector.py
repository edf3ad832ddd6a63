"""
config_selector.py

Pick the first pool config (with vault support) whose activation, lock and
vesting parameters satisfy a Requirement. Input order is preserved: the
first candidate that passes wins.
"""

from typing import Optional, Sequence

from meteora_pool_launcher.auto_config.logging_config import logging_config
from meteora_pool_launcher.pools.models import (
    ConfigMatch,
    PoolConfigRecord,
    Requirement,
    VaultConfigRecord,
)

logger = logging_config.get_logger(__name__)


def pool_matches_requirement(pool: PoolConfigRecord, requirement: Requirement) -> bool:
    # activation_duration is compared as a lower bound against the maximum
    return (
        pool.activation_type == requirement.activation_type
        and pool.activation_duration >= requirement.maximum_activation_duration
    )


def vault_matches_requirement(vault: VaultConfigRecord, requirement: Requirement) -> bool:
    lock_duration = vault.lock_duration
    vesting_duration = vault.vesting_duration
    return (
        requirement.minimum_lock_duration <= lock_duration <= requirement.maximum_lock_duration
        and requirement.minimum_vesting_duration <= vesting_duration <= requirement.maximum_vesting_duration
        and vault.activation_type == requirement.activation_type
    )


def matches_requirement(pool: PoolConfigRecord, vault: VaultConfigRecord, requirement: Requirement) -> bool:
    """Full predicate a selected (pool, vault) pair satisfies."""
    return (
        pool.has_vault_support
        and pool.vault_config_key == vault.key
        and pool_matches_requirement(pool, requirement)
        and vault_matches_requirement(vault, requirement)
    )


def find_vault_config(vault_configs: Sequence[VaultConfigRecord], key: str) -> Optional[VaultConfigRecord]:
    return next((vault for vault in vault_configs if vault.key == key), None)


def select_pool_config(
    pool_configs: Sequence[PoolConfigRecord],
    vault_configs: Sequence[VaultConfigRecord],
    requirement: Requirement,
) -> Optional[ConfigMatch]:
    """
    Return the first pool config matching the requirement, paired with its
    vault config, or None when nothing matches.

    Args:
        pool_configs: Candidates in priority order (public scope first, then creator scope).
        vault_configs: Vault configs of the catalog selected by requirement.vault_mode.
        requirement: Caller constraints.

    Raises:
        ValueError: If either list is None.
    """
    if pool_configs is None or vault_configs is None:
        raise ValueError("pool_configs and vault_configs are required")

    candidates = [pool for pool in pool_configs if pool.has_vault_support]

    for pool in candidates:
        if not pool_matches_requirement(pool, requirement):
            continue

        vault = find_vault_config(vault_configs, pool.vault_config_key)
        if vault is None:
            logger.debug(f"Pool config {pool.key}: vault config {pool.vault_config_key} not found, skipping")
            continue

        if vault_matches_requirement(vault, requirement):
            logger.debug(f"Pool config {pool.key} matched with vault config {vault.key}")
            return ConfigMatch(pool=pool, vault=vault)

    return None
