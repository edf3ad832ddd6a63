# Program ids (mainnet)
DYNAMIC_AMM_PROGRAM_ID = "Eo7WjKq67rjJQSZxS6z3YkapzY3eMj6Xy8X5EQVn5UaB"
ALPHA_VAULT_PROGRAM_ID = "vaU6kP7iNEGkbmPkLmZfGwiGxd4Mob24QQCie5R9kd2"

SYSVAR_CLOCK_PUBKEY = "SysvarC1ock11111111111111111111111111111111"

# Default pubkey (32 zero bytes); used on chain as "no reference"
SENTINEL_PUBKEY = "11111111111111111111111111111111"

WRAPPED_SOL_MINT = "So11111111111111111111111111111111111111112"

# Byte offset of pool_creator_authority inside a dynamic AMM Config account
POOL_CREATOR_AUTHORITY_OFFSET = 8 + 72

# Pool starts trading 5 hours after creation
DEFAULT_ACTIVATION_DELAY_SECONDS = 3600 * 5

# Requirement defaults
DEFAULT_MAXIMUM_ACTIVATION_DURATION = 86400  # 1 day
DEFAULT_MINIMUM_LOCK_DURATION = 60 * 30  # 30 minutes
DEFAULT_MAXIMUM_LOCK_DURATION = 86400  # 1 day
DEFAULT_MINIMUM_VESTING_DURATION = 60 * 60  # 1 hour
DEFAULT_MAXIMUM_VESTING_DURATION = 60 * 60 * 24 * 7  # 1 week
