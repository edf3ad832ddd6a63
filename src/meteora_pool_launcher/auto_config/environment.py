import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

DEFAULT_RPC_URL = 'https://api.mainnet-beta.solana.com'
DEFAULT_MAX_REQUESTS_PER_SECOND = 8

logger = logging.getLogger(__name__)


def load_env_file(env_path: Optional[Path] = None) -> bool:
    """
        Load environment variables from config/.env using python-dotenv.

        Args:
            env_path: Optional path to the .env file. Defaults to
                      <project_root>/config/.env.

        Returns:
            True if a .env file was found and loaded, False otherwise.
        """
    if env_path is None:
        project_root = Path(__file__).resolve().parents[3]
        env_path = project_root / "config" / ".env"

    if not Path(env_path).exists():
        logger.debug(f"No .env file found at {env_path}")
        return False

    try:
        was_loaded = load_dotenv(dotenv_path=env_path, override=True)
        if not was_loaded:
            logger.warning(f"Environment variables NOT LOADED from: {env_path}")
        return was_loaded
    except OSError as e:
        logger.warning(f"Could not load .env file from {env_path}: {e}")
        return False


class Config:
    def __init__(self, env_path: Optional[Path] = None) -> None:
        load_env_file(env_path)

        # Solana RPC Configuration
        self.solana_rpc_url = self._get_env_var('SOLANA_RPC_URL', default=DEFAULT_RPC_URL)

        fallback_url = self._get_env_var('FALLBACK_RPC_URL')
        self.fallback_rpc_url: Optional[str] = fallback_url if fallback_url else None

        # Rate Limiting Configuration
        try:
            rate_limit_str = self._get_env_var(
                'MAX_REQUESTS_PER_SECOND', default=str(DEFAULT_MAX_REQUESTS_PER_SECOND)
            )
            self.max_requests_per_second = int(rate_limit_str)
        except (ValueError, TypeError):
            logger.warning(
                f"Invalid MAX_REQUESTS_PER_SECOND value. Using default: {DEFAULT_MAX_REQUESTS_PER_SECOND}"
            )
            self.max_requests_per_second = DEFAULT_MAX_REQUESTS_PER_SECOND

        # Logging Configuration
        log_level_str = self._get_env_var('LOG_LEVEL', default='INFO').upper()

        level_map = {
            'DEBUG': logging.DEBUG,
            'INFO': logging.INFO,
            'WARNING': logging.WARNING,
            'ERROR': logging.ERROR,
            'CRITICAL': logging.CRITICAL
        }

        if log_level_str not in level_map:
            logger.warning(f"Invalid LOG_LEVEL: {log_level_str}. Using INFO.")
            self.log_level = logging.INFO
        else:
            self.log_level = level_map[log_level_str]

        log_dir = self._get_env_var('LOG_DIR')
        self.log_dir: Optional[Path] = Path(log_dir) if log_dir else None

        output_dir = self._get_env_var('OUTPUT_DIR')
        self.output_dir: Optional[Path] = Path(output_dir) if output_dir else None

        # Pubkey whose private pool configs are searched alongside the public ones
        creator = self._get_env_var('CREATOR_PUBKEY')
        self.creator_pubkey: Optional[str] = creator if creator else None

        self._validate_config()

    def _get_env_var(self, key: str, default: str = '') -> str:
        value = os.environ.get(key)
        return value if value is not None else default

    def _validate_config(self) -> None:
        """Validate configuration values with fallbacks for invalid values."""
        if not self.solana_rpc_url or not self.solana_rpc_url.startswith('http'):
            logger.warning(f"Invalid SOLANA_RPC_URL: {self.solana_rpc_url}. Using default public RPC endpoint.")
            self.solana_rpc_url = DEFAULT_RPC_URL

        if self.max_requests_per_second <= 0:
            logger.warning(
                f"Invalid MAX_REQUESTS_PER_SECOND: {self.max_requests_per_second}. "
                f"Using default rate limit of {DEFAULT_MAX_REQUESTS_PER_SECOND} req/sec."
            )
            self.max_requests_per_second = DEFAULT_MAX_REQUESTS_PER_SECOND

        if 'api.mainnet-beta.solana.com' in self.solana_rpc_url:
            logger.info("Using public Solana RPC. Consider a dedicated RPC provider for getProgramAccounts.")

    def get_rpc_url(self, use_fallback: bool = False) -> str:
        if use_fallback:
            if self.fallback_rpc_url is not None:
                return self.fallback_rpc_url
            raise ValueError("A fallback RPC URL was requested, but none is configured.")

        return self.solana_rpc_url

    def _mask_url(self, url: Optional[str]) -> str:
        """Mask sensitive parts of URL for display."""
        if not url:
            return "None"

        # last part might contain API key
        parts = url.split('/')
        if len(parts) >= 4:
            for i in range(len(parts) - 1, -1, -1):
                if parts[i] and len(parts[i]) > 10:
                    parts[i] = '*' * 8
                    break

        return '/'.join(parts)

    def describe(self) -> str:
        """Current configuration as text, with RPC keys masked."""
        lines = [
            "Meteora Pool Launcher Configuration:",
            f"   RPC URL: {self._mask_url(self.solana_rpc_url)}",
        ]
        if self.fallback_rpc_url is not None:
            lines.append(f"   Fallback RPC: {self._mask_url(self.fallback_rpc_url)}")
        lines.append(f"   Rate Limit: {self.max_requests_per_second} req/sec")
        lines.append(f"   Log Level: {logging.getLevelName(self.log_level)}")
        lines.append(f"   Creator: {self.creator_pubkey or 'not set'}")
        return "\n".join(lines)

config = Config()

# Access the config
def get_solana_rpc_url(use_fallback: bool = False) -> str:
    """Get the configured Solana RPC URL."""
    return config.get_rpc_url(use_fallback)

def get_fallback_rpc_url() -> Optional[str]:
    return config.fallback_rpc_url

def get_max_requests_per_second() -> int:
    """Get the configured rate limit."""
    return config.max_requests_per_second

def get_creator_pubkey() -> Optional[str]:
    return config.creator_pubkey
