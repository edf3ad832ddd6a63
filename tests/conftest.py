import os
import tempfile

import pytest

# Keep log files and saved output out of the working tree
_tmp_root = tempfile.mkdtemp(prefix="meteora_pool_launcher_tests_")
os.environ.setdefault("LOG_DIR", os.path.join(_tmp_root, "logs"))
os.environ.setdefault("OUTPUT_DIR", os.path.join(_tmp_root, "data"))

from meteora_pool_launcher.constants import SENTINEL_PUBKEY
from meteora_pool_launcher.pools.account_layouts import encode_pubkey
from meteora_pool_launcher.pools.models import (
    ActivationType,
    Clock,
    CreatedPool,
    PoolConfigRecord,
    Requirement,
    VaultConfigRecord,
    VaultMode,
)


def pubkey(n: int) -> str:
    """Deterministic, valid base58 pubkey for test fixtures."""
    return encode_pubkey(bytes([n]) * 32)


def make_pool(key, vault_config_key=SENTINEL_PUBKEY, activation_type=ActivationType.TIMESTAMP,
              activation_duration=90000, **kwargs):
    return PoolConfigRecord(
        key=key,
        activation_type=activation_type,
        activation_duration=activation_duration,
        vault_config_key=vault_config_key,
        **kwargs,
    )


def make_vault(key, start=1800, end=5400, activation_type=ActivationType.TIMESTAMP,
               vault_mode=VaultMode.PRORATA, **kwargs):
    return VaultConfigRecord(
        key=key,
        activation_type=activation_type,
        start_vesting_duration=start,
        end_vesting_duration=end,
        vault_mode=vault_mode,
        **kwargs,
    )


class FakeLedger:
    """In-memory LedgerQueryService recording the calls it receives."""

    def __init__(self, pool_configs_by_scope=None, vault_configs_by_mode=None, clock=None):
        self.pool_configs_by_scope = pool_configs_by_scope or {}
        self.vault_configs_by_mode = vault_configs_by_mode or {}
        self.clock = clock or Clock(
            slot=250_000_000,
            epoch_start_timestamp=1_700_000_000,
            epoch=600,
            leader_schedule_epoch=601,
            unix_timestamp=1_700_050_000,
        )
        self.calls = []

    def fetch_pool_configs(self, scope_key):
        self.calls.append(("fetch_pool_configs", scope_key))
        return list(self.pool_configs_by_scope.get(scope_key, []))

    def fetch_vault_configs(self, vault_mode):
        self.calls.append(("fetch_vault_configs", vault_mode))
        return list(self.vault_configs_by_mode.get(vault_mode, []))

    def fetch_clock(self):
        self.calls.append(("fetch_clock",))
        return self.clock


class FakeCreator:
    """PoolVaultCreator that records calls instead of sending transactions."""

    def __init__(self, pool_address=None):
        self.pool_address = pool_address or pubkey(200)
        self.calls = []

    def create_pool(self, **kwargs):
        self.calls.append(("create_pool", kwargs))
        return CreatedPool(pool_address=self.pool_address, signatures=["pool-sig-1", "pool-sig-2"])

    def create_vault(self, **kwargs):
        self.calls.append(("create_vault", kwargs))
        return "vault-sig"


@pytest.fixture
def requirement():
    return Requirement(
        activation_type=ActivationType.TIMESTAMP,
        maximum_activation_duration=86400,
        minimum_lock_duration=1800,
        maximum_lock_duration=86400,
        minimum_vesting_duration=3600,
        maximum_vesting_duration=604800,
        vault_mode=VaultMode.PRORATA,
    )


@pytest.fixture
def creator():
    return pubkey(7)
