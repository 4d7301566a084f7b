"""
REST client for the CLOB API.

The client is in one of three authentication levels:

    L0: host only, public endpoints
    L1: wallet signer + chain id, can create or derive API credentials
    L2: L1 + API credentials, can call credential-authenticated endpoints
"""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import requests

from . import config
from .credentials import ApiCreds
from .exceptions import AuthLevelError, ClobError
from .headers import Clock, create_l1_headers, create_l2_headers, utc_timestamp
from .signer import EthSigner, PrivateKeySigner

L0 = 0
L1 = 1
L2 = 2

L1_AUTH_UNAVAILABLE = "A private key and chain id are needed to interact with this endpoint!"
L2_AUTH_UNAVAILABLE = "API credentials are needed to interact with this endpoint!"

# Endpoints
TIME = "/time"
CREATE_API_KEY = "/auth/api-key"
DERIVE_API_KEY = "/auth/derive-api-key"
GET_API_KEYS = "/auth/api-keys"
DELETE_API_KEY = "/auth/api-key"
MIDPOINT = "/midpoint"
MIDPOINTS = "/midpoints"
PRICE = "/price"
PRICES = "/prices"


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class BookParams:
    """Token and side pair used by the batch price endpoint."""

    token_id: str
    side: Side = Side.BUY


class ClobClient:
    """Synchronous CLOB REST client with L1/L2 authentication."""

    def __init__(
        self,
        host: str,
        key: Optional[str] = None,
        chain_id: Optional[int] = None,
        creds: Optional[ApiCreds] = None,
        signer: Optional[EthSigner] = None,
        clock: Clock = utc_timestamp,
        timeout: float = config.DEFAULT_TIMEOUT,
    ):
        """
        Initialize the client.

        Args:
            host: API base URL, e.g. https://clob.polymarket.com
            key: Hex-encoded wallet private key (alternative to signer)
            chain_id: Chain id, required together with a key or signer
            creds: API credentials, requires a key or signer
            signer: Custom EthSigner (hardware or remote key)
            clock: Source of the current UTC timestamp for header signing
            timeout: Per-request timeout in seconds

        Raises:
            ValueError: If the combination of arguments is inconsistent
            SignerError: If the private key is invalid
        """
        if key is not None and signer is not None:
            raise ValueError("Pass either a private key or a signer, not both")
        if key is not None:
            signer = PrivateKeySigner(key)
        if signer is not None and chain_id is None:
            raise ValueError("chain_id is required when a signer is configured")
        if creds is not None and signer is None:
            raise ValueError("API credentials require a private key or signer")

        self.host = host.rstrip("/")
        self.timeout = timeout
        self._signer = signer
        self._chain_id = chain_id
        self._creds = creds
        self._clock = clock

        logging.info(f"Initialized CLOB client for {self.host} (auth level L{self.mode})")

    @property
    def mode(self) -> int:
        if self._signer is not None and self._creds is not None:
            return L2
        if self._signer is not None:
            return L1
        return L0

    @property
    def chain_id(self) -> Optional[int]:
        return self._chain_id

    @property
    def creds(self) -> Optional[ApiCreds]:
        return self._creds

    def set_api_creds(self, creds: ApiCreds) -> None:
        """
        Attach API credentials, moving the client from L1 to L2.

        Raises:
            AuthLevelError: If no signer is configured or credentials are already set
        """
        self.assert_level_1_auth()
        if self._creds is not None:
            raise AuthLevelError("API credentials are already set")
        self._creds = creds
        logging.info(f"API credentials set for {self.get_address()}")

    def assert_level_1_auth(self) -> None:
        if self.mode < L1:
            raise AuthLevelError(L1_AUTH_UNAVAILABLE)

    def assert_level_2_auth(self) -> None:
        if self.mode < L2:
            raise AuthLevelError(L2_AUTH_UNAVAILABLE)

    def get_address(self) -> Optional[str]:
        return self._signer.address() if self._signer is not None else None

    def get_collateral_address(self) -> Optional[str]:
        contract_config = config.get_contract_config(self._chain_id)
        return contract_config.collateral if contract_config else None

    def get_conditional_address(self) -> Optional[str]:
        contract_config = config.get_contract_config(self._chain_id)
        return contract_config.conditional_tokens if contract_config else None

    def get_exchange_address(self, neg_risk: bool = False) -> Optional[str]:
        contract_config = config.get_contract_config(self._chain_id, neg_risk)
        return contract_config.exchange if contract_config else None

    def _url(self, endpoint: str) -> str:
        return f"{self.host}{endpoint}"

    def _l1_headers(self, nonce: Optional[int]) -> Mapping[str, str]:
        self.assert_level_1_auth()
        return create_l1_headers(self._signer, self._chain_id, nonce, clock=self._clock)

    def _l2_headers(self, method: str, endpoint: str, body: Optional[str] = None) -> Mapping[str, str]:
        self.assert_level_2_auth()
        return create_l2_headers(
            self._creds,
            method,
            endpoint,
            body,
            address=self.get_address(),
            clock=self._clock,
        )

    def get_ok(self) -> bool:
        """Health check. True when the server answers at all, whatever the status code."""
        try:
            response = requests.get(self._url("/"), timeout=self.timeout)
        except requests.RequestException as e:
            logging.warning(f"CLOB health check failed: {e}")
            return False
        logging.debug(f"CLOB health check answered with HTTP {response.status_code}")
        return True

    def get_server_time(self) -> int:
        response = requests.get(self._url(TIME), timeout=self.timeout)
        response.raise_for_status()
        return int(response.text.strip())

    def create_api_key(self, nonce: Optional[int] = None) -> ApiCreds:
        """
        Create new API credentials on the venue.

        Raises:
            AuthLevelError: If the client is not at least L1
            requests.HTTPError: If the venue rejects the request
            CredentialError: If the response does not contain credentials
        """
        headers = self._l1_headers(nonce)
        url = self._url(CREATE_API_KEY)
        logging.debug(f"POST {url}")

        response = requests.post(url, headers=dict(headers), timeout=self.timeout)
        response.raise_for_status()
        return ApiCreds.from_dict(response.json())

    def derive_api_key(self, nonce: Optional[int] = None) -> ApiCreds:
        """
        Derive the existing API credentials for this wallet and nonce.

        Raises:
            AuthLevelError: If the client is not at least L1
            requests.HTTPError: If the venue rejects the request
            CredentialError: If the response does not contain credentials
        """
        headers = self._l1_headers(nonce)
        url = self._url(DERIVE_API_KEY)
        logging.debug(f"GET {url}")

        response = requests.get(url, headers=dict(headers), timeout=self.timeout)
        response.raise_for_status()
        return ApiCreds.from_dict(response.json())

    def create_or_derive_api_creds(self, nonce: Optional[int] = None) -> ApiCreds:
        """
        Create API credentials, falling back to derivation if creation fails.

        Any failure of the create call triggers the fallback, including
        network errors; the create error is logged and discarded.
        """
        self.assert_level_1_auth()
        try:
            return self.create_api_key(nonce)
        except Exception as e:
            logging.warning(f"API key creation failed, deriving instead: {e}")
        return self.derive_api_key(nonce)

    def get_api_keys(self) -> List[str]:
        headers = self._l2_headers("GET", GET_API_KEYS)
        url = self._url(GET_API_KEYS)
        logging.debug(f"GET {url}")

        response = requests.get(url, headers=dict(headers), timeout=self.timeout)
        response.raise_for_status()
        payload = response.json()
        api_keys = payload.get("apiKeys") if isinstance(payload, dict) else None
        if not isinstance(api_keys, list):
            raise ClobError(f"Unexpected response from {GET_API_KEYS}: {payload!r}")
        return api_keys

    def delete_api_key(self) -> str:
        headers = self._l2_headers("DELETE", DELETE_API_KEY)
        url = self._url(DELETE_API_KEY)
        logging.debug(f"DELETE {url}")

        response = requests.delete(url, headers=dict(headers), timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def get_midpoint(self, token_id: str) -> Dict[str, Any]:
        response = requests.get(self._url(MIDPOINT), params={"token_id": token_id}, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_midpoints(self, token_ids: List[str]) -> Dict[str, str]:
        body = [{"token_id": token_id} for token_id in token_ids]
        response = requests.post(self._url(MIDPOINTS), json=body, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_price(self, token_id: str, side: Side) -> Dict[str, Any]:
        params = {"token_id": token_id, "side": Side(side).value}
        response = requests.get(self._url(PRICE), params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_prices(self, params: List[BookParams]) -> Dict[str, Dict[str, str]]:
        body = [{"token_id": p.token_id, "side": Side(p.side).value} for p in params]
        response = requests.post(self._url(PRICES), json=body, timeout=self.timeout)
        response.raise_for_status()
        return response.json()


# Global client instance (loaded lazily)
_client: Optional[ClobClient] = None


def get_clob_client() -> ClobClient:
    """
    Get or create the global ClobClient built from the environment.

    Uses CLOB_HOST, CLOB_CHAIN_ID, CLOB_REQUEST_TIMEOUT, and optionally
    CLOB_PRIVATE_KEY and CLOB_API_CREDENTIALS.

    Raises:
        ValueError: If a variable is set but invalid, or credentials are
            configured without a private key
        SignerError: If the private key is invalid
    """
    global _client

    if _client is None:
        private_key = os.getenv("CLOB_PRIVATE_KEY") or None
        has_creds = bool(os.getenv("CLOB_API_CREDENTIALS"))
        if has_creds and not private_key:
            raise ValueError("CLOB_API_CREDENTIALS is set but CLOB_PRIVATE_KEY is not")

        creds = ApiCreds.from_env("CLOB_API_CREDENTIALS") if has_creds else None

        _client = ClobClient(
            os.getenv("CLOB_HOST", config.DEFAULT_HOST),
            key=private_key,
            chain_id=config.get_env_chain_id() if private_key else None,
            creds=creds,
            timeout=config.get_env_timeout(),
        )

    return _client
