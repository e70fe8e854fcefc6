"""
Flattr OAuth 2.0 provider.

Composes the generic OAuth2Strategy with Flattr's authorize/token endpoints and
a profile fetcher for the Flattr REST v2 user endpoint. Applications supply a
verify callback receiving (access_token, refresh_token, profile) and returning
the application user, or a falsy value if the credentials are not accepted.

    strategy = FlattrStrategy(
        StrategyConfig(
            client_id="123-456-789",
            client_secret="shhh-its-a-secret",
            callback_url="https://www.example.net/auth/flattr/callback",
        ),
        verify=lambda access_token, refresh_token, profile: find_or_create(profile),
    )
"""

import dataclasses
from typing import Optional

import httpx

from flattr_auth.config import StrategyConfig
from flattr_auth.errors import ConfigurationError
from flattr_auth.oauth2 import DEFAULT_TIMEOUT, OAuth2Strategy, VerifyCallback
from flattr_auth.profile import PROVIDER, NormalizedProfile, parse_profile

AUTHORIZATION_URL = "https://flattr.com/oauth/authorize"
TOKEN_URL = "https://flattr.com/oauth/token"
PROFILE_URL = "https://api.flattr.com/rest/v2/user"


class FlattrStrategy:
    """OAuth provider strategy that authenticates users through Flattr."""

    name: str = PROVIDER

    def __init__(
        self,
        config: StrategyConfig,
        verify: Optional[VerifyCallback],
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Fill in Flattr's default endpoints and build the OAuth2 engine."""
        if verify is None:
            raise ConfigurationError("FlattrStrategy requires a verify callback")

        self.config = dataclasses.replace(
            config,
            authorization_url=config.authorization_url or AUTHORIZATION_URL,
            token_url=config.token_url or TOKEN_URL,
            profile_url=config.profile_url or PROFILE_URL,
        )
        self._oauth2 = OAuth2Strategy(
            self.config,
            verify,
            profile_fetcher=self.user_profile,
            name=self.name,
            transport=transport,
            timeout=timeout,
        )

    @property
    def oauth2(self) -> OAuth2Strategy:
        return self._oauth2

    async def login_redirect(self, request):
        """Return RedirectResponse to Flattr's authorization page."""
        return await self._oauth2.login_redirect(request)

    async def handle_callback(self, request):
        """Exchange the code, fetch the Flattr profile and return the verified user."""
        return await self._oauth2.handle_callback(request)

    async def user_profile(self, access_token: str) -> NormalizedProfile:
        """
        Retrieve the user's profile from Flattr.

        The normalized profile has provider "flattr", id set to the Flattr
        username and display_name set to "<firstname> <lastname>".
        TransportError from the request propagates as is; a body that is not a
        JSON object raises ParseError.
        """
        body = await self._oauth2.get_protected_resource(self.config.profile_url, access_token)
        return parse_profile(body)
