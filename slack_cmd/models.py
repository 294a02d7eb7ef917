"""Dataclasses representing Slack workspaces, users and channels."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class Workspace:
    id: str
    name: str
    domain: str
    token: str = field(default="", repr=False)

    @classmethod
    def from_team(cls, team: Dict[str, Any], token: str) -> "Workspace":
        return cls(
            id=team.get("id", ""),
            name=team.get("name", ""),
            domain=team.get("domain", ""),
            token=token,
        )


@dataclass(slots=True, frozen=True)
class User:
    id: str
    name: str
    real_name: str = ""
    is_bot: bool = False

    @classmethod
    def from_member(cls, member: Dict[str, Any]) -> "User":
        return cls(
            id=member.get("id", ""),
            name=member.get("name", ""),
            real_name=member.get("real_name", ""),
            is_bot=bool(member.get("is_bot", False)),
        )


@dataclass(slots=True)
class Channel:
    """A conversation the token's owner can post into.

    ``peer_user_id`` is only meaningful when ``is_direct_message`` is set.
    """

    id: str
    name: str
    members: List[str] = field(default_factory=list)
    is_member: bool = False
    purpose: str = ""
    is_direct_message: bool = False
    peer_user_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Channel":
        purpose = record.get("purpose") or {}
        is_im = bool(record.get("is_im", False))
        return cls(
            id=record.get("id", ""),
            name=record.get("name", ""),
            members=list(record.get("members") or []),
            is_member=bool(record.get("is_member", False)),
            purpose=purpose.get("value", "") if isinstance(purpose, dict) else str(purpose),
            is_direct_message=is_im,
            peer_user_id=record.get("user") if is_im else None,
        )


__all__ = ["Workspace", "User", "Channel"]
