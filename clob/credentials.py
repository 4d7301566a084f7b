"""
API credentials issued by the CLOB after L1 authentication.
"""
import json
import os
from dataclasses import dataclass
from typing import Any, Dict

from .exceptions import CredentialError

CREDENTIALS_ENV_VAR = "CLOB_API_CREDENTIALS"


@dataclass(frozen=True, repr=False)
class ApiCreds:
    """The {api_key, secret, passphrase} triple used for L2 authentication."""

    api_key: str
    secret: str
    passphrase: str

    def __post_init__(self) -> None:
        empty = [name for name in ("api_key", "secret", "passphrase") if not getattr(self, name)]
        if empty:
            raise CredentialError(f"Empty credential fields: {', '.join(empty)}")

    def __repr__(self) -> str:
        # secret and passphrase stay out of logs and tracebacks
        return f"ApiCreds(api_key={self.api_key!r}, secret='***', passphrase='***')"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiCreds":
        """
        Build credentials from a venue response or a config payload.

        Accepts the venue's camelCase ``apiKey`` as well as ``api_key``.

        Raises:
            CredentialError: If a field is missing or empty
        """
        if not isinstance(data, dict):
            raise CredentialError("Credentials payload must be an object")

        api_key = data.get("apiKey", data.get("api_key"))
        missing = [
            name for name, value in (
                ("apiKey", api_key),
                ("secret", data.get("secret")),
                ("passphrase", data.get("passphrase")),
            )
            if not value
        ]
        if missing:
            raise CredentialError(f"Missing required credential fields: {', '.join(missing)}")

        return cls(api_key=api_key, secret=data["secret"], passphrase=data["passphrase"])

    @classmethod
    def from_env(cls, env_var: str = CREDENTIALS_ENV_VAR) -> "ApiCreds":
        """
        Load credentials from an environment variable containing JSON.

        Expected JSON format:
        {
            "apiKey": "...",
            "secret": "<base64>",
            "passphrase": "..."
        }

        Raises:
            ValueError: If the variable is missing or its content is invalid
        """
        creds_json = os.getenv(env_var)
        if not creds_json:
            raise ValueError(f"Environment variable '{env_var}' is not set")

        try:
            creds_data = json.loads(creds_json)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in '{env_var}': {e}")

        return cls.from_dict(creds_data)

    def to_dict(self) -> Dict[str, str]:
        """Venue JSON representation."""
        return {"apiKey": self.api_key, "secret": self.secret, "passphrase": self.passphrase}
