"""
L1 (wallet signature) and L2 (HMAC) authentication headers for the CLOB API.

L1 headers prove control of a wallet and are only needed to create or derive
API credentials. L2 headers prove possession of those credentials and are
attached to every other authenticated request.
"""
import base64
import binascii
import hashlib
import hmac
import logging
import time
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Union

from eth_account.messages import encode_typed_data
from eth_utils import to_hex

from .credentials import ApiCreds
from .exceptions import AuthLevelError, CredentialError
from .signer import EthSigner

POLY_ADDRESS = "POLY_ADDRESS"
POLY_SIGNATURE = "POLY_SIGNATURE"
POLY_TIMESTAMP = "POLY_TIMESTAMP"
POLY_NONCE = "POLY_NONCE"
POLY_API_KEY = "POLY_API_KEY"
POLY_PASSPHRASE = "POLY_PASSPHRASE"

L1_HEADER_NAMES = frozenset({POLY_ADDRESS, POLY_SIGNATURE, POLY_TIMESTAMP, POLY_NONCE})
L2_HEADER_NAMES = frozenset({POLY_ADDRESS, POLY_SIGNATURE, POLY_TIMESTAMP, POLY_API_KEY, POLY_PASSPHRASE})

CLOB_DOMAIN_NAME = "ClobAuthDomain"
CLOB_VERSION = "1"
MSG_TO_SIGN = "This message attests that I control the given wallet"

DEFAULT_NONCE = 0
MAX_NONCE = 2**256 - 1

CLOB_AUTH_TYPES = {
    "ClobAuth": [
        {"name": "address", "type": "address"},
        {"name": "timestamp", "type": "string"},
        {"name": "nonce", "type": "uint256"},
        {"name": "message", "type": "string"},
    ]
}

HeaderSet = Mapping[str, str]
Clock = Callable[[], int]


def utc_timestamp() -> int:
    """Current UTC time in whole seconds."""
    return int(time.time())


def build_clob_auth_message(address: str, chain_id: int, timestamp: int, nonce: int) -> bytes:
    """
    Build the canonical EIP-712 message signed for L1 authentication.

    Layout: 0x19 0x01 || domainSeparator || hashStruct(ClobAuth), where the
    domain is {name: "ClobAuthDomain", version: "1", chainId} and ClobAuth is
    (address address, string timestamp, uint256 nonce, string message).

    Args:
        address: Signer wallet address
        chain_id: Chain id used for domain separation
        timestamp: UTC seconds, encoded as a decimal string in the struct
        nonce: Anti-replay nonce

    Returns:
        66-byte encoded message
    """
    signable = encode_typed_data(
        domain_data={
            "name": CLOB_DOMAIN_NAME,
            "version": CLOB_VERSION,
            "chainId": chain_id,
        },
        message_types=CLOB_AUTH_TYPES,
        message_data={
            "address": address,
            "timestamp": str(timestamp),
            "nonce": nonce,
            "message": MSG_TO_SIGN,
        },
    )
    return b"\x19" + signable.version + signable.header + signable.body


def _resolve_nonce(nonce: Optional[int]) -> int:
    if nonce is None:
        return DEFAULT_NONCE
    if isinstance(nonce, bool) or not isinstance(nonce, int):
        raise ValueError(f"Nonce must be an integer, got {type(nonce).__name__}")
    if nonce < 0 or nonce > MAX_NONCE:
        raise ValueError("Nonce must fit in an unsigned 256-bit integer")
    return nonce


def create_l1_headers(
    signer: Optional[EthSigner],
    chain_id: int,
    nonce: Optional[int] = None,
    clock: Clock = utc_timestamp,
) -> HeaderSet:
    """
    Create L1 headers from a wallet signature.

    Args:
        signer: Wallet signer
        chain_id: Chain id used for domain separation
        nonce: Optional nonce, defaults to DEFAULT_NONCE
        clock: Source of the current UTC timestamp

    Returns:
        Immutable mapping with POLY_ADDRESS, POLY_SIGNATURE, POLY_TIMESTAMP and POLY_NONCE

    Raises:
        AuthLevelError: If no signer is given
        ValueError: If the nonce is out of range
    """
    if signer is None:
        raise AuthLevelError("A signer is required for L1 headers")

    timestamp = clock()
    nonce = _resolve_nonce(nonce)
    address = signer.address()

    message = build_clob_auth_message(address, chain_id, timestamp, nonce)
    signature = signer.sign(message)

    logging.debug(f"Created L1 headers for {address} (timestamp={timestamp}, nonce={nonce})")
    return MappingProxyType({
        POLY_ADDRESS: address,
        POLY_SIGNATURE: to_hex(signature),
        POLY_TIMESTAMP: str(timestamp),
        POLY_NONCE: str(nonce),
    })


def decode_secret(secret: str) -> bytes:
    """
    Decode a base64 API secret into HMAC key bytes.

    Both the URL-safe and the standard alphabet are accepted; padding is required.

    Raises:
        CredentialError: If the secret is empty or not valid base64
    """
    if not secret:
        raise CredentialError("API secret is empty")
    normalized = secret.replace("-", "+").replace("_", "/")
    try:
        return base64.b64decode(normalized, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CredentialError(f"API secret is not valid base64: {e}") from e


def build_hmac_signature(
    secret: str,
    timestamp: int,
    method: str,
    request_path: str,
    body: Optional[Union[str, bytes]] = None,
) -> str:
    """
    Compute the L2 HMAC-SHA256 signature.

    The signed string is timestamp + METHOD + request_path + body, with an
    absent body contributing nothing.

    Returns:
        URL-safe base64 encoded digest
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    message = f"{timestamp}{method.upper()}{request_path}{body or ''}"

    digest = hmac.new(decode_secret(secret), message.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("utf-8")


def create_l2_headers(
    creds: Optional[ApiCreds],
    method: str,
    request_path: str,
    body: Optional[Union[str, bytes]] = None,
    address: Optional[str] = None,
    clock: Clock = utc_timestamp,
) -> HeaderSet:
    """
    Create L2 headers from API credentials.

    Args:
        creds: API credentials issued by the venue
        method: HTTP method
        request_path: Request path including any query string
        body: Request body exactly as sent on the wire
        address: Wallet address owning the credentials, sent as POLY_ADDRESS
        clock: Source of the current UTC timestamp

    Returns:
        Immutable mapping with POLY_API_KEY, POLY_SIGNATURE, POLY_PASSPHRASE,
        POLY_TIMESTAMP and, if an address was given, POLY_ADDRESS

    Raises:
        AuthLevelError: If no credentials are given
        CredentialError: If the secret is not valid base64
    """
    if creds is None:
        raise AuthLevelError("API credentials are required for L2 headers")

    timestamp = clock()
    signature = build_hmac_signature(creds.secret, timestamp, method, request_path, body)

    headers = {
        POLY_API_KEY: creds.api_key,
        POLY_SIGNATURE: signature,
        POLY_PASSPHRASE: creds.passphrase,
        POLY_TIMESTAMP: str(timestamp),
    }
    if address:
        headers[POLY_ADDRESS] = address

    logging.debug(f"Created L2 headers for {method.upper()} {request_path} (timestamp={timestamp})")
    return MappingProxyType(headers)
