"""
Protocols for OAuth providers used by the auth router.

OAuthProvider is what the router talks to: redirect to the IdP and turn the
callback into an application user. ProfileFetcher is the single extension point
a provider plugs into the generic OAuth2 engine.
"""

from typing import Any, Protocol, runtime_checkable

from flattr_auth.profile import NormalizedProfile


@runtime_checkable
class OAuthProvider(Protocol):
    """Protocol for an OAuth2 provider strategy (e.g. Flattr)."""

    name: str

    async def login_redirect(self, request):
        """Redirect the user to the identity provider's authorization page."""
        ...

    async def handle_callback(self, request) -> Any:
        """Handle the OAuth callback: exchange code, fetch profile, return the verified user."""
        ...


@runtime_checkable
class ProfileFetcher(Protocol):
    """Fetch and normalize the provider profile for an access token."""

    async def __call__(self, access_token: str) -> NormalizedProfile: ...
