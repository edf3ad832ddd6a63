"""
solana_rpc.py

General utility functions for interacting with the Solana RPC API: rate
limited JSON-RPC requests with retries, plus the account queries the pool
launcher needs (getProgramAccounts, getAccountInfo).
"""

import base64
import requests
from meteora_pool_launcher.auto_config.environment import (
    get_solana_rpc_url,
    get_fallback_rpc_url,
    get_max_requests_per_second,
)
from meteora_pool_launcher.utils import rate_limiter as net
from meteora_pool_launcher.auto_config.logging_config import logging_config

logger = logging_config.get_logger(__name__)

rate_limiter = net.RateLimiter(max_requests=get_max_requests_per_second(), time_window=1.0)

def _post_with_retries(rpc_url, payload, max_retries):
    for attempt in range(max_retries):
        try:
            rate_limiter.acquire()
            response = requests.post(rpc_url, json=payload, timeout=30)

            if response.status_code == 429:
                logger.warning(f"Rate limited on attempt {attempt + 1}")
                net.exponential_backoff_sleep(attempt)
                continue

            response.raise_for_status()
            data = response.json()

            if 'error' in data:
                logger.error(f"RPC Error for {payload.get('method')}: {data['error']}")
                return None

            return data

        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Request failed on attempt {attempt + 1}: {e}")
            if attempt < max_retries - 1:
                net.exponential_backoff_sleep(attempt)

    return None

def make_rpc_request(payload, max_retries=3):
    """
    Make a Solana RPC request with rate limiting and retries.
    Falls back to FALLBACK_RPC_URL when the primary endpoint gives up.

    Args:
        payload (dict): The JSON-RPC payload to send.
        max_retries (int): Number of retry attempts per endpoint.

    Returns:
        dict or None: The parsed JSON response, or None on failure.
    """
    data = _post_with_retries(get_solana_rpc_url(), payload, max_retries)
    if data is not None:
        return data

    fallback_url = get_fallback_rpc_url()
    if fallback_url:
        logger.warning(f"Primary RPC failed for {payload.get('method')}, trying fallback endpoint")
        return _post_with_retries(fallback_url, payload, max_retries)

    return None

def memcmp_filter(offset, raw_bytes):
    """getProgramAccounts memcmp filter matching raw_bytes at offset."""
    return {
        "memcmp": {
            "offset": offset,
            "bytes": base64.b64encode(raw_bytes).decode("ascii"),
            "encoding": "base64",
        }
    }

def get_program_accounts(program_id, filters=None):
    """
    Fetch all accounts owned by program_id matching the given filters.

    Returns:
        list of (pubkey, raw account bytes) tuples, or None on failure.
    """
    payload = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "getProgramAccounts",
        "params": [program_id, {
            "encoding": "base64",
            "filters": filters or [],
        }]
    }
    data = make_rpc_request(payload)
    if data is None or data.get('result') is None:
        return None

    accounts = []
    for entry in data['result']:
        encoded, _encoding = entry['account']['data']
        accounts.append((entry['pubkey'], base64.b64decode(encoded)))
    logger.debug(f"getProgramAccounts {program_id}: {len(accounts)} accounts")
    return accounts

def get_account_info(address):
    """
    Fetch the raw data of a single account.

    Returns:
        bytes or None: Account data, or None if the request failed or the account does not exist.
    """
    payload = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "getAccountInfo",
        "params": [address, {"encoding": "base64"}]
    }
    data = make_rpc_request(payload)
    if not data:
        return None
    value = (data.get('result') or {}).get('value')
    if value is None:
        logger.info(f"Account {address} not found.")
        return None
    encoded, _encoding = value['data']
    return base64.b64decode(encoded)
