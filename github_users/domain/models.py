"""Domain models representing core business entities."""
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from github_users.domain.errors import DecodingError


def _require(payload: Mapping[str, Any], key: str, kind: type) -> Any:
    value = payload.get(key)
    # bool is an int subclass but never a valid id or count
    if not isinstance(value, kind) or isinstance(value, bool):
        raise DecodingError(
            f"Field '{key}' must be of type {kind.__name__}, got {value!r}"
        )
    return value


def _require_url(payload: Mapping[str, Any], key: str) -> str:
    value = _require(payload, key, str)
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise DecodingError(f"Field '{key}' is not an absolute URL: {value!r}")
    return value


def _require_count(payload: Mapping[str, Any], key: str) -> int:
    value = _require(payload, key, int)
    if value < 0:
        raise DecodingError(f"Field '{key}' must be >= 0, got {value}")
    return value


@dataclass(frozen=True)
class UserSummary:
    """Immutable entry of the paginated GitHub user listing.

    ``id`` is the identity key and also the pagination cursor.
    """
    id: int
    login: str
    avatar_url: str
    profile_url: str

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> 'UserSummary':
        """Build a summary from a ``GET /users`` array element.

        Raises:
            DecodingError: When a field is missing or malformed
        """
        if not isinstance(payload, Mapping):
            raise DecodingError(f"Expected a user object, got {type(payload).__name__}")
        return cls(
            id=_require(payload, "id", int),
            login=_require(payload, "login", str),
            avatar_url=_require_url(payload, "avatar_url"),
            profile_url=_require_url(payload, "html_url"),
        )

    def to_api(self) -> dict:
        """Returns the wire representation using GitHub's field names."""
        return {
            "id": self.id,
            "login": self.login,
            "avatar_url": self.avatar_url,
            "html_url": self.profile_url,
        }


@dataclass(frozen=True)
class UserDetail:
    """Immutable profile of a single user, keyed by ``login``."""
    login: str
    avatar_url: str
    profile_url: str
    location: Optional[str]
    followers: int
    following: int

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> 'UserDetail':
        """Build a detail record from a ``GET /users/{login}`` response.

        Raises:
            DecodingError: When a field is missing or malformed
        """
        if not isinstance(payload, Mapping):
            raise DecodingError(f"Expected a user object, got {type(payload).__name__}")
        location = payload.get("location")
        if location is not None and not isinstance(location, str):
            raise DecodingError(f"Field 'location' must be a string, got {location!r}")
        return cls(
            login=_require(payload, "login", str),
            avatar_url=_require_url(payload, "avatar_url"),
            profile_url=_require_url(payload, "html_url"),
            location=location,
            followers=_require_count(payload, "followers"),
            following=_require_count(payload, "following"),
        )

    def to_api(self) -> dict:
        """Returns the wire representation using GitHub's field names."""
        return {
            "login": self.login,
            "avatar_url": self.avatar_url,
            "html_url": self.profile_url,
            "location": self.location,
            "followers": self.followers,
            "following": self.following,
        }
