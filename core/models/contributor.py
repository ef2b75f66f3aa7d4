# =============================================================================
# core/models/contributor.py - Contributor Records
# =============================================================================
# Immutable records built from the upstream contributors listing:
# - AvatarImage: Raw avatar bytes plus the media type GitHub declared
# - ContributorRecord: One contributor as the renderer and API see it
#
# Records are constructed fresh from each upstream response and are never
# mutated afterwards. The cache hands the same tuple of records to every
# reader until the entry expires.
# =============================================================================

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any


DEFAULT_AVATAR_MEDIA_TYPE = "image/png"


@dataclass(frozen=True)
class AvatarImage:
    """
    Avatar image fetched from the upstream avatar URL.

    Stored as raw bytes so the renderer can inline it as a data URI
    without a second network round-trip when the badge is viewed.
    """
    data: bytes
    media_type: str = DEFAULT_AVATAR_MEDIA_TYPE

    @property
    def data_uri(self) -> str:
        """Encode the image as a `data:` URI for an SVG <image> href."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"


@dataclass(frozen=True)
class ContributorRecord:
    """
    A single contributor of a repository.

    Field order mirrors the upstream payload. `avatar` is only populated
    when avatar inlining was requested and the avatar fetch succeeded;
    otherwise the renderer falls back to a generated placeholder.
    """
    login: str
    profile_url: str
    avatar_url: str
    contributions: int
    avatar: AvatarImage | None = None

    @classmethod
    def from_api(
        cls,
        item: dict[str, Any],
        avatar: AvatarImage | None = None,
    ) -> "ContributorRecord":
        """Create a record from one item of the contributors listing."""
        return cls(
            login=str(item.get("login") or ""),
            profile_url=str(item.get("html_url") or ""),
            avatar_url=str(item.get("avatar_url") or ""),
            contributions=max(0, int(item.get("contributions") or 0)),
            avatar=avatar,
        )

    def to_summary(self) -> dict[str, Any]:
        """Public JSON view used by the stats and batch endpoints."""
        return {
            "username": self.login,
            "contributions": self.contributions,
            "avatar_url": self.avatar_url,
            "profile_url": self.profile_url,
        }
