"""
Strategy configuration.

StrategyConfig is immutable once built. Endpoint fields left as None are filled
in by the provider strategy with its own defaults; from_env() reads the same
fields from FLATTR_* environment variables (load .env first).
"""

import os
from dataclasses import dataclass
from typing import Optional, Sequence, Union


@dataclass(frozen=True)
class StrategyConfig:
    client_id: str
    client_secret: str
    callback_url: str
    authorization_url: Optional[str] = None
    token_url: Optional[str] = None
    scope: Optional[Union[str, Sequence[str]]] = None
    profile_url: Optional[str] = None

    @property
    def scope_string(self) -> Optional[str]:
        """Scope as the space separated string OAuth2 expects, or None."""
        if not self.scope:
            return None
        if isinstance(self.scope, str):
            return self.scope
        return " ".join(self.scope)

    @classmethod
    def from_env(cls, prefix: str = "FLATTR_") -> "StrategyConfig":
        """Build a config from <prefix>CLIENT_ID, <prefix>CLIENT_SECRET, <prefix>CALLBACK_URL, ..."""
        return cls(
            client_id=os.getenv(f"{prefix}CLIENT_ID", ""),
            client_secret=os.getenv(f"{prefix}CLIENT_SECRET", ""),
            callback_url=os.getenv(f"{prefix}CALLBACK_URL", ""),
            authorization_url=os.getenv(f"{prefix}AUTHORIZATION_URL") or None,
            token_url=os.getenv(f"{prefix}TOKEN_URL") or None,
            scope=os.getenv(f"{prefix}SCOPE") or None,
            profile_url=os.getenv(f"{prefix}PROFILE_URL") or None,
        )
