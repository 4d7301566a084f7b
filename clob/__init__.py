"""
CLOB API client package.

Supports L1 (wallet signature) and L2 (API credential HMAC) authentication.
"""
from .signer import EthSigner, PrivateKeySigner
from .credentials import ApiCreds
from .headers import create_l1_headers, create_l2_headers, build_hmac_signature
from .client import ClobClient, Side, BookParams, get_clob_client, L0, L1, L2
from .exceptions import ClobError, AuthLevelError, CredentialError, SignerError

__all__ = [
    'EthSigner',
    'PrivateKeySigner',
    'ApiCreds',
    'create_l1_headers',
    'create_l2_headers',
    'build_hmac_signature',
    'ClobClient',
    'Side',
    'BookParams',
    'get_clob_client',
    'L0',
    'L1',
    'L2',
    'ClobError',
    'AuthLevelError',
    'CredentialError',
    'SignerError',
]
