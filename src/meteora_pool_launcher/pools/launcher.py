"""
launcher.py

Create a dynamic AMM pool with a permissionless alpha vault.

The pipeline is strictly sequential, each step consuming the previous one's
output:

    1. fetch public + creator pool configs and the vault configs
    2. select the first pool config matching the requirement
    3. read the clock and compute the activation point
    4. create the pool with the selected config
    5. create the vault for the new pool with the linked vault config

Pool and vault creation are delegated to a PoolVaultCreator, which owns
transaction building, signing and submission.
"""

from typing import Optional, Protocol

from pydantic import BaseModel

from meteora_pool_launcher.auto_config.logging_config import logging_config
from meteora_pool_launcher.constants import DEFAULT_ACTIVATION_DELAY_SECONDS, SENTINEL_PUBKEY
from meteora_pool_launcher.pools.config_fetcher import LedgerQueryService
from meteora_pool_launcher.pools.config_selector import select_pool_config
from meteora_pool_launcher.pools.errors import NoMatchingConfigError
from meteora_pool_launcher.pools.models import (
    ActivationType,
    Clock,
    ConfigMatch,
    CreatedPool,
    LaunchResult,
    PoolType,
    Requirement,
    VaultMode,
)

logger = logging_config.get_logger(__name__)


class PoolVaultCreator(Protocol):
    def create_pool(
        self,
        pool_config_key: str,
        token_a_mint: str,
        token_b_mint: str,
        token_a_amount: int,
        token_b_amount: int,
        activation_point: int,
    ) -> CreatedPool: ...

    def create_vault(
        self,
        pool_address: str,
        base_mint: str,
        quote_mint: str,
        pool_type: PoolType,
        vault_mode: VaultMode,
        vault_config_key: str,
    ) -> str: ...


class LaunchParams(BaseModel):
    token_a_mint: str
    token_b_mint: str
    token_a_amount: int
    token_b_amount: int
    # seconds for timestamp activation, slots for slot activation
    activation_delay: int = DEFAULT_ACTIVATION_DELAY_SECONDS


def get_pool_config_by_requirement(
    ledger: LedgerQueryService,
    creator: str,
    requirement: Requirement,
) -> Optional[ConfigMatch]:
    """
    Find a pool config usable by creator that satisfies the requirement.

    Public configs (usable by anyone) are searched before the configs
    reserved for the creator.
    """
    public_pool_configs = ledger.fetch_pool_configs(SENTINEL_PUBKEY)
    creator_pool_configs = ledger.fetch_pool_configs(creator)
    pool_configs = public_pool_configs + creator_pool_configs

    with_vault_support = sum(1 for pool in pool_configs if pool.has_vault_support)
    logger.info(f"Got {with_vault_support} usable pool configs with vault support")

    vault_configs = ledger.fetch_vault_configs(requirement.vault_mode)

    return select_pool_config(pool_configs, vault_configs, requirement)


def compute_activation_point(clock: Clock, activation_type: ActivationType, delay: int) -> int:
    if activation_type == ActivationType.TIMESTAMP:
        return clock.unix_timestamp + delay
    return clock.slot + delay


def launch_pool_with_permissionless_vault(
    ledger: LedgerQueryService,
    pool_vault_creator: PoolVaultCreator,
    creator: str,
    launch: LaunchParams,
    requirement: Requirement,
) -> LaunchResult:
    """
    Select a pool config, then create the pool and its permissionless vault.

    Raises:
        NoMatchingConfigError: If no pool config matches; nothing is created.
    """
    logger.info("Getting pool configs...")
    match = get_pool_config_by_requirement(ledger, creator, requirement)
    if match is None:
        logger.error("No pool config matches the requirement, aborting pool creation")
        raise NoMatchingConfigError(requirement)

    logger.info(f"Got pool config {match.pool.key} (vault config {match.vault.key})")

    clock = ledger.fetch_clock()
    activation_point = compute_activation_point(clock, requirement.activation_type, launch.activation_delay)

    logger.info(f"Creating pool, activation point {activation_point}")
    created = pool_vault_creator.create_pool(
        pool_config_key=match.pool.key,
        token_a_mint=launch.token_a_mint,
        token_b_mint=launch.token_b_mint,
        token_a_amount=launch.token_a_amount,
        token_b_amount=launch.token_b_amount,
        activation_point=activation_point,
    )
    for signature in created.signatures:
        logger.info(signature)
    logger.info(f"Pool created {created.pool_address}")

    logger.info("Creating vault")
    vault_signature = pool_vault_creator.create_vault(
        pool_address=created.pool_address,
        base_mint=launch.token_a_mint,
        quote_mint=launch.token_b_mint,
        pool_type=PoolType.DYNAMIC,
        vault_mode=requirement.vault_mode,
        vault_config_key=match.pool.vault_config_key,
    )
    logger.info(vault_signature)

    return LaunchResult(
        match=match,
        activation_point=activation_point,
        pool_address=created.pool_address,
        pool_signatures=created.signatures,
        vault_signature=vault_signature,
    )
