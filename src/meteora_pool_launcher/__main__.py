"""
Find a Meteora dynamic AMM pool config with permissionless vault support
that matches activation, lock and vesting requirements.

Usage:
    python -m meteora_pool_launcher [CREATOR_PUBKEY] [options]

Examples:
    # Defaults: timestamp activation, >= 1 day activation window,
    # lock 30 min - 1 day, vesting 1 hour - 1 week, pro rata vault
    python -m meteora_pool_launcher 7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU

    # FCFS vault, save the match under data/pool_configs/
    python -m meteora_pool_launcher --vault-mode fcfs --save

CREATOR_PUBKEY defaults to the CREATOR_PUBKEY environment variable.
"""

import argparse
import sys

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from meteora_pool_launcher.auto_config.environment import config, get_creator_pubkey
from meteora_pool_launcher.auto_config.logging_config import logging_config
from meteora_pool_launcher.constants import (
    DEFAULT_MAXIMUM_ACTIVATION_DURATION,
    DEFAULT_MAXIMUM_LOCK_DURATION,
    DEFAULT_MAXIMUM_VESTING_DURATION,
    DEFAULT_MINIMUM_LOCK_DURATION,
    DEFAULT_MINIMUM_VESTING_DURATION,
)
from meteora_pool_launcher.pools.account_layouts import decode_pubkey
from meteora_pool_launcher.pools.config_fetcher import RpcLedgerQueryService
from meteora_pool_launcher.pools.errors import LauncherError
from meteora_pool_launcher.pools.launcher import get_pool_config_by_requirement
from meteora_pool_launcher.pools.models import ActivationType, ConfigMatch, Requirement, VaultMode
from meteora_pool_launcher.utils.output_manager import save_output

logger = logging_config.get_logger(__name__)

EXIT_NO_MATCH = 2


def build_parser():
    parser = argparse.ArgumentParser(
        prog="meteora_pool_launcher",
        description="Select a dynamic AMM pool config with alpha vault support.",
    )
    parser.add_argument("creator", nargs="?", help="pubkey whose private pool configs are also searched")
    parser.add_argument("--activation-type", choices=["slot", "timestamp"], default="timestamp")
    parser.add_argument("--max-activation-duration", type=int, default=DEFAULT_MAXIMUM_ACTIVATION_DURATION)
    parser.add_argument("--min-lock-duration", type=int, default=DEFAULT_MINIMUM_LOCK_DURATION)
    parser.add_argument("--max-lock-duration", type=int, default=DEFAULT_MAXIMUM_LOCK_DURATION)
    parser.add_argument("--min-vesting-duration", type=int, default=DEFAULT_MINIMUM_VESTING_DURATION)
    parser.add_argument("--max-vesting-duration", type=int, default=DEFAULT_MAXIMUM_VESTING_DURATION)
    parser.add_argument("--vault-mode", choices=["prorata", "fcfs"], default="prorata")
    parser.add_argument("--save", action="store_true", help="write the match to data/pool_configs/")
    return parser


def requirement_from_args(args) -> Requirement:
    return Requirement(
        activation_type=ActivationType[args.activation_type.upper()],
        maximum_activation_duration=args.max_activation_duration,
        minimum_lock_duration=args.min_lock_duration,
        maximum_lock_duration=args.max_lock_duration,
        minimum_vesting_duration=args.min_vesting_duration,
        maximum_vesting_duration=args.max_vesting_duration,
        vault_mode=VaultMode[args.vault_mode.upper()],
    )


def render_match(match: ConfigMatch) -> Table:
    table = Table(title="Matched pool config")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Pool config", match.pool.key)
    table.add_row("Activation type", match.pool.activation_type.name)
    table.add_row("Activation duration", str(match.pool.activation_duration))
    table.add_row("Vault config", match.vault.key)
    table.add_row("Vault mode", match.vault.vault_mode.name)
    table.add_row("Lock duration", str(match.vault.lock_duration))
    table.add_row("Vesting duration", str(match.vault.vesting_duration))
    return table


def main(argv=None, ledger=None, console=None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    creator = args.creator or get_creator_pubkey()
    if not creator:
        logger.error("Missing creator pubkey: pass it as an argument or set CREATOR_PUBKEY")
        return 1

    try:
        decode_pubkey(creator)
    except ValueError as e:
        logger.error(f"Invalid creator pubkey {creator}: {e}")
        return 1

    requirement = requirement_from_args(args)
    ledger = ledger or RpcLedgerQueryService()
    logger.debug(config.describe())

    try:
        with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                TimeElapsedColumn(),
                console=console,
                transient=True,
            ) as progress:
            progress.add_task(description="[blue]Fetching pool and vault configs...", total=None)
            match = get_pool_config_by_requirement(ledger, creator, requirement)
    except LauncherError as e:
        logger.error(f"Failed to fetch configs: {e}")
        return 1

    if match is None:
        logger.error("No pool config with vault support matches the requirement")
        return EXIT_NO_MATCH

    console.print(render_match(match))

    if args.save:
        output_file = save_output(match, "pool_configs", f"{match.pool.key}.json")
        logger.info(f"Pool config saved to: {output_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
