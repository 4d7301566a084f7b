"""
Wallet signing capability used for L1 authentication.
"""
from typing import Protocol

from eth_account import Account
from eth_account.messages import SignableMessage

from .exceptions import SignerError


class EthSigner(Protocol):
    """Protocol for anything that can sign on behalf of a wallet."""

    def address(self) -> str:
        """
        Return the wallet address.

        Returns:
            20-byte account identifier as a 0x-prefixed hex string
        """
        ...

    def sign(self, message: bytes) -> bytes:
        """
        Sign the keccak256 digest of an EIP-191 encoded message.

        Args:
            message: Encoded message, starting with the 0x19 prefix byte

        Returns:
            65-byte recoverable signature (r || s || v)
        """
        ...


class PrivateKeySigner:
    """Sign messages with a raw secp256k1 private key held in memory."""

    def __init__(self, private_key: str):
        """
        Initialize the signer.

        Args:
            private_key: Hex-encoded private key, with or without 0x prefix

        Raises:
            SignerError: If the key cannot be parsed
        """
        try:
            self._account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            raise SignerError("Invalid private key") from e

    def __repr__(self) -> str:
        return f"PrivateKeySigner(address={self.address()!r})"

    def address(self) -> str:
        return self._account.address

    def sign(self, message: bytes) -> bytes:
        if len(message) < 2 or message[0] != 0x19:
            raise SignerError("Message is not EIP-191 encoded")
        signable = SignableMessage(
            version=message[1:2],
            header=message[2:34],
            body=message[34:],
        )
        signed = self._account.sign_message(signable)
        return bytes(signed.signature)
