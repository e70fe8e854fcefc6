"""
Flattr OAuth 2.0 authentication strategy.

Exposes the strategy (FlattrStrategy), the generic engine it composes
(OAuth2Strategy), configuration and profile records, the error taxonomy,
session helpers and the FastAPI auth router factory (create_auth_router).
"""

from .config import StrategyConfig
from .errors import AuthenticationFailed, ConfigurationError, ParseError, TransportError
from .flattr import AUTHORIZATION_URL, PROFILE_URL, TOKEN_URL, FlattrStrategy
from .oauth2 import OAuth2Strategy
from .profile import FlattrUser, NormalizedProfile, parse_profile
from .protocol import OAuthProvider, ProfileFetcher
from .router import create_auth_router
from .session import get_user, is_session_stale, require_user, touch_session_activity

__all__ = [
    "FlattrStrategy",
    "OAuth2Strategy",
    "OAuthProvider",
    "ProfileFetcher",
    "StrategyConfig",
    "NormalizedProfile",
    "FlattrUser",
    "parse_profile",
    "AUTHORIZATION_URL",
    "TOKEN_URL",
    "PROFILE_URL",
    "ConfigurationError",
    "TransportError",
    "ParseError",
    "AuthenticationFailed",
    "get_user",
    "is_session_stale",
    "require_user",
    "touch_session_activity",
    "create_auth_router",
]
