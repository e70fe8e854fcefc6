"""
Flattr user-info schema and the normalized profile handed to verify callbacks.

Flattr's /rest/v2/user returns a JSON object with (among others) username,
firstname and lastname. Absent or null name fields decode to "" so a partial
response degrades the display name instead of failing.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from flattr_auth.errors import ParseError

PROVIDER = "flattr"


@dataclass(frozen=True)
class FlattrUser:
    username: str = ""
    firstname: str = ""
    lastname: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlattrUser":
        return cls(
            username=_text(data.get("username")),
            firstname=_text(data.get("firstname")),
            lastname=_text(data.get("lastname")),
        )

    @property
    def full_name(self) -> str:
        # Single space join, no trimming: {"username": "bob"} gives " ".
        return f"{self.firstname} {self.lastname}"


@dataclass(frozen=True)
class NormalizedProfile:
    """Provider-agnostic profile: provider tag, subject id and display name."""

    provider: str
    id: str
    display_name: str
    raw: str = field(default="", repr=False)
    data: Dict[str, Any] = field(default_factory=dict, repr=False, hash=False)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_profile(body: str) -> NormalizedProfile:
    """
    Decode a Flattr user-info body into a NormalizedProfile.

    Raises ParseError if the body is not JSON or not a JSON object.
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Failed to parse user profile: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object for user profile, got {type(data).__name__}")

    user = FlattrUser.from_dict(data)
    return NormalizedProfile(
        provider=PROVIDER,
        id=user.username,
        display_name=user.full_name,
        raw=body,
        data=data,
    )
