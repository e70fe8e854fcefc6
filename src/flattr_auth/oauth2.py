"""
Generic OAuth 2.0 authorization-code engine.

Uses Authlib's httpx client for the authorization URL and the token exchange,
and plain httpx for protected-resource calls. Provider specifics are injected:
endpoint URLs through StrategyConfig and profile retrieval through a
ProfileFetcher. The application's verify callback decides whether the
authenticated profile maps to a user.
"""

import inspect
import secrets
from typing import Any, Callable, Dict, Optional

import httpx
from authlib.integrations.httpx_client import AsyncOAuth2Client, OAuthError
from starlette.responses import RedirectResponse

from flattr_auth.config import StrategyConfig
from flattr_auth.errors import AuthenticationFailed, ConfigurationError, TransportError
from flattr_auth.logging_config import get_logger
from flattr_auth.protocol import ProfileFetcher

# verify(access_token, refresh_token, profile) -> user (falsy to reject); may be async
VerifyCallback = Callable[..., Any]

DEFAULT_TIMEOUT = 20.0


class OAuth2Strategy:
    """OAuth2 authorization-code flow with a pluggable profile fetcher."""

    name: str = "oauth2"

    def __init__(
        self,
        config: StrategyConfig,
        verify: Optional[VerifyCallback],
        profile_fetcher: ProfileFetcher,
        name: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Validate config and callbacks; no network activity happens here."""
        if verify is None or not callable(verify):
            raise ConfigurationError("OAuth2Strategy requires a verify callback")
        if not config.authorization_url:
            raise ConfigurationError("OAuth2Strategy requires an authorization_url")
        if not config.token_url:
            raise ConfigurationError("OAuth2Strategy requires a token_url")
        for attr in ("client_id", "client_secret", "callback_url"):
            if not getattr(config, attr):
                raise ConfigurationError(f"OAuth2Strategy requires a {attr}")

        self.config = config
        self.name = name or self.name
        self._verify = verify
        self._profile_fetcher = profile_fetcher
        self._transport = transport
        self._timeout = timeout
        self._log = get_logger(strategy=self.name)

    @property
    def state_key(self) -> str:
        """Session key holding the pending authorization state."""
        return f"oauth2:{self.name}:state"

    def _client(self) -> AsyncOAuth2Client:
        kwargs: Dict[str, Any] = {"timeout": self._timeout}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return AsyncOAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            scope=self.config.scope_string,
            redirect_uri=self.config.callback_url,
            **kwargs,
        )

    async def authorization_url(self) -> tuple[str, str]:
        """Return (url, state) for the provider's authorization endpoint."""
        async with self._client() as client:
            url, state = client.create_authorization_url(
                self.config.authorization_url, state=secrets.token_urlsafe(24)
            )
        return url, state

    async def login_redirect(self, request):
        """Store a fresh state in the session and redirect to the provider."""
        url, state = await self.authorization_url()
        request.session[self.state_key] = state
        self._log.info("oauth2_redirect", authorization_url=self.config.authorization_url)
        return RedirectResponse(url=url, status_code=302)

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """POST the authorization code to the token endpoint and return the token dict."""
        async with self._client() as client:
            try:
                token = await client.fetch_token(self.config.token_url, code=code)
            except OAuthError as e:
                raise AuthenticationFailed(e.error or "token_error", e.description) from e
            except httpx.HTTPError as e:
                raise AuthenticationFailed("token_error", str(e)) from e
            except ValueError as e:
                # Non-JSON token endpoint response
                raise AuthenticationFailed("token_error", "malformed token response") from e

        if not token.get("access_token"):
            raise AuthenticationFailed("token_error", "no access_token in token response")
        return dict(token)

    async def get_protected_resource(self, url: str, access_token: str) -> str:
        """
        GET a protected resource with the access token as a Bearer credential.

        Returns the response body. Raises TransportError for network failures and
        non-2xx statuses; never retries.
        """
        headers = {"Authorization": f"Bearer {access_token}", "Accept": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.get(url, headers=headers)
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Failed to fetch {url}: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to fetch {url}: {e}") from e
        return r.text

    async def handle_callback(self, request) -> Any:
        """
        Complete the flow on the redirect back from the provider.

        Checks the provider error and state parameters, exchanges the code, fetches
        the profile and hands (access_token, refresh_token, profile) to verify.
        Returns whatever verify returns; a falsy result is a rejection.
        """
        params = request.query_params
        expected_state = request.session.pop(self.state_key, None)

        if params.get("error"):
            self._log.info("oauth2_denied", error=params.get("error"))
            raise AuthenticationFailed(params["error"], params.get("error_description"))

        code = params.get("code")
        if not code:
            raise AuthenticationFailed("invalid_request", "missing authorization code")

        state = params.get("state") or ""
        if not expected_state or not secrets.compare_digest(state.encode(), expected_state.encode()):
            self._log.warning("oauth2_state_mismatch")
            raise AuthenticationFailed("invalid_state", "state parameter does not match")

        token = await self.exchange_code(code)
        profile = await self._profile_fetcher(token["access_token"])

        user = self._verify(token["access_token"], token.get("refresh_token"), profile)
        if inspect.isawaitable(user):
            user = await user
        if not user:
            self._log.info("oauth2_rejected", subject=profile.id)
            raise AuthenticationFailed("rejected", "verify callback rejected the profile")

        self._log.info("oauth2_authenticated", subject=profile.id)
        return user
