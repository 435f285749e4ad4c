"""
Microsoft Graph /me profile normalization.

Graph returns a user resource such as:

    {"id": "...", "displayName": "Ada Lovelace", "givenName": "Ada",
     "surname": "Lovelace", "mail": "ada@contoso.com",
     "userPrincipalName": "Ada@Contoso.onmicrosoft.com"}

which is mapped into the provider-neutral Profile below.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Optional

PROVIDER = "microsoft"
GRAPH_ME_URL = "https://graph.microsoft.com/v1.0/me"

# userPrincipalName is only an email when it looks like one (guest/B2B UPNs often don't).
EMAIL_RE = re.compile(
    r"(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))"
    r"@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))"
)


def is_email(value: str) -> bool:
    """Return True if value looks like an email address."""
    return EMAIL_RE.fullmatch(value) is not None


@dataclass
class ProfileName:
    family_name: Optional[str] = None
    given_name: Optional[str] = None


@dataclass
class Email:
    value: str


@dataclass
class Profile:
    id: Optional[str] = None
    display_name: Optional[str] = None
    name: ProfileName = field(default_factory=ProfileName)
    # mail first, then userPrincipalName; no dedup.
    emails: list[Email] = field(default_factory=list)
    raw_body: str = ""
    raw_json: dict[str, Any] = field(default_factory=dict)
    provider: str = PROVIDER

    def as_dict(self) -> dict[str, Any]:
        """Conventional profile shape (displayName, name.familyName, _raw, _json)."""
        return {
            "provider": self.provider,
            "id": self.id,
            "displayName": self.display_name,
            "name": {
                "familyName": self.name.family_name,
                "givenName": self.name.given_name,
            },
            "emails": [{"value": e.value} for e in self.emails],
            "_raw": self.raw_body,
            "_json": self.raw_json,
        }


def parse_profile(body: str) -> Profile:
    """
    Parse a Graph /me response body into a Profile.

    Raises json.JSONDecodeError for a non-JSON body. A body that is valid JSON
    but not an object (array, string, null) raises ValueError instead of
    producing an empty profile, since Graph /me always returns an object.
    """
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object from {GRAPH_ME_URL}, got {type(data).__name__}")

    emails = []
    if data.get("mail"):
        emails.append(Email(value=data["mail"]))

    upn = data.get("userPrincipalName")
    if upn and is_email(str(upn).lower()):
        emails.append(Email(value=str(upn).lower()))

    return Profile(
        id=data.get("id"),
        display_name=data.get("displayName"),
        name=ProfileName(family_name=data.get("surname"), given_name=data.get("givenName")),
        emails=emails,
        raw_body=body,
        raw_json=data,
    )
