import logging

import pytest

from meteora_pool_launcher.auto_config.environment import DEFAULT_RPC_URL, Config, load_env_file


def clear_env(monkeypatch):
    for key in ("SOLANA_RPC_URL", "FALLBACK_RPC_URL", "MAX_REQUESTS_PER_SECOND", "LOG_LEVEL", "CREATOR_PUBKEY"):
        # setenv first so values written by load_dotenv are undone too
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_defaults(monkeypatch, tmp_path):
    clear_env(monkeypatch)

    config = Config(env_path=tmp_path / "missing.env")

    assert config.solana_rpc_url == DEFAULT_RPC_URL
    assert config.fallback_rpc_url is None
    assert config.max_requests_per_second == 8
    assert config.log_level == logging.INFO
    assert config.creator_pubkey is None


def test_values_loaded_from_env_file(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "SOLANA_RPC_URL=https://example.solana-mainnet.quiknode.pro/abcdef0123456789\n"
        "FALLBACK_RPC_URL=https://fallback.example\n"
        "MAX_REQUESTS_PER_SECOND=20\n"
        "LOG_LEVEL=debug\n"
        "CREATOR_PUBKEY=7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU\n"
    )

    assert load_env_file(env_file)
    config = Config(env_path=env_file)

    assert config.get_rpc_url() == "https://example.solana-mainnet.quiknode.pro/abcdef0123456789"
    assert config.get_rpc_url(use_fallback=True) == "https://fallback.example"
    assert config.max_requests_per_second == 20
    assert config.log_level == logging.DEBUG
    assert config.creator_pubkey == "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
    assert "abcdef0123456789" not in config.describe()


def test_invalid_values_fall_back(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    monkeypatch.setenv("SOLANA_RPC_URL", "ws://not-http")
    monkeypatch.setenv("MAX_REQUESTS_PER_SECOND", "lots")
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    config = Config(env_path=tmp_path / "missing.env")

    assert config.solana_rpc_url == DEFAULT_RPC_URL
    assert config.max_requests_per_second == 8
    assert config.log_level == logging.INFO


def test_missing_fallback_raises(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    config = Config(env_path=tmp_path / "missing.env")

    with pytest.raises(ValueError):
        config.get_rpc_url(use_fallback=True)
