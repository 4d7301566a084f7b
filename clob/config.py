"""
Contract addresses per chain and environment settings.
"""
import os
from dataclasses import dataclass
from typing import Dict, Optional

POLYGON = 137
AMOY = 80002

DEFAULT_HOST = "https://clob.polymarket.com"
DEFAULT_CHAIN_ID = POLYGON
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class ContractConfig:
    """Venue contract addresses on one chain."""

    exchange: str
    collateral: str
    conditional_tokens: str


CONFIG: Dict[int, ContractConfig] = {
    POLYGON: ContractConfig(
        exchange="0x4bFb41d5B3570DeFd03C39a9A4D8dE6Bd8B8982E",
        collateral="0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174",
        conditional_tokens="0x4D97DCd97eC945f40cF65F87097ACe5EA0476045",
    ),
    AMOY: ContractConfig(
        exchange="0xdFE02Eb6733538f8Ea35D585af8DE5958AD99E40",
        collateral="0x9c4e1703476e875070ee25b56a58b008cfb8fa78",
        conditional_tokens="0x69308FB512518e39F9b16112fA8d994F4e2Bf8bB",
    ),
}

NEG_RISK_CONFIG: Dict[int, ContractConfig] = {
    POLYGON: ContractConfig(
        exchange="0xC5d563A36AE78145C45a50134d48A1215220f80a",
        collateral="0x2791bca1f2de4661ed88a30c99a7a9449aa84174",
        conditional_tokens="0x4D97DCd97eC945f40cF65F87097ACe5EA0476045",
    ),
    AMOY: ContractConfig(
        exchange="0xC5d563A36AE78145C45a50134d48A1215220f80a",
        collateral="0x9c4e1703476e875070ee25b56a58b008cfb8fa78",
        conditional_tokens="0x69308FB512518e39F9b16112fA8d994F4e2Bf8bB",
    ),
}


def get_contract_config(chain_id: Optional[int], neg_risk: bool = False) -> Optional[ContractConfig]:
    """
    Look up contract addresses for a chain.

    Args:
        chain_id: Chain id, may be None
        neg_risk: Use the neg-risk exchange deployment

    Returns:
        ContractConfig, or None if the chain is unknown
    """
    if chain_id is None:
        return None
    table = NEG_RISK_CONFIG if neg_risk else CONFIG
    return table.get(chain_id)


def get_env_chain_id() -> int:
    """
    Read CLOB_CHAIN_ID from the environment.

    Raises:
        ValueError: If the variable is not an integer
    """
    value = os.getenv("CLOB_CHAIN_ID", str(DEFAULT_CHAIN_ID))
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"CLOB_CHAIN_ID must be an integer, got '{value}'")


def get_env_timeout() -> float:
    """
    Read CLOB_REQUEST_TIMEOUT (seconds) from the environment.

    Raises:
        ValueError: If the variable is not a positive number
    """
    value = os.getenv("CLOB_REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"CLOB_REQUEST_TIMEOUT must be a number, got '{value}'")
    if timeout <= 0:
        raise ValueError(f"CLOB_REQUEST_TIMEOUT must be positive, got '{value}'")
    return timeout
