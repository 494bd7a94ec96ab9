"""Authentication module for loading Coda API credentials.

This module loads the bearer token from environment variables using
python-dotenv. Two modes are supported: a system-wide token shared by every
invocation, and a per-connection user token bound to a selected document.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

SYSTEM_TOKEN_VAR = 'CODA_API_TOKEN'
CONNECTION_TOKEN_VAR = 'CODA_USER_TOKEN'


class Credentials(NamedTuple):
    """Coda API credentials."""
    api_token: str
    source: str


class Authenticator:
    """Loads and validates the Coda API token from environment variables.

    The token is read on every call and never cached or logged.

    Environment variables:
        CODA_API_TOKEN: token used in "system" mode
        CODA_USER_TOKEN: token used in "connection" mode (falls back to
            CODA_API_TOKEN when unset)

    Example:
        >>> auth = Authenticator(mode="system")
        >>> creds = auth.get_credentials()
    """

    def __init__(self, mode: str = "system", endpoint: str = "https://coda.io"):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            mode: "system" or "connection"
            endpoint: API base URL, used in error messages only
        """
        if mode not in ("system", "connection"):
            raise ValueError(f"Unknown auth mode: {mode}")
        self.mode = mode
        self.endpoint = endpoint
        load_dotenv()

    def _candidate_vars(self):
        if self.mode == "connection":
            return [CONNECTION_TOKEN_VAR, SYSTEM_TOKEN_VAR]
        return [SYSTEM_TOKEN_VAR]

    def get_credentials(self) -> Credentials:
        """Get the Coda API token from the environment.

        Returns:
            Credentials: token and the variable it was read from

        Raises:
            InvalidCredentialsError: If no token variable is set
        """
        candidates = self._candidate_vars()
        for var in candidates:
            # Blank values count as unset
            token: Optional[str] = os.getenv(var)
            if token and token.strip():
                return Credentials(api_token=token.strip(), source=var)

        raise InvalidCredentialsError(
            endpoint=self.endpoint,
            reason=f"set {' or '.join(candidates)}",
        )
