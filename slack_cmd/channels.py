"""Collect the channels a user has joined and resolve direct-message names."""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import ChannelNotFoundError, DirectoryError, SlackApiError, SlackTransportError
from .models import Channel, User
from .slack_client import SlackClient

# Queried in this order; the first endpoint to report a channel id wins.
LISTING_METHODS = ("channels.list", "conversations.list", "groups.list", "im.list")
UNKNOWN_PEER_NAME = "Direct Message to ???"


class JoinedChannels:
    """Channels keyed by id, keeping the first record seen for each id."""

    def __init__(self) -> None:
        self._by_id: Dict[str, Channel] = {}

    def add(self, channel: Channel) -> bool:
        """Keep ``channel`` unless its id is known or the user is not in it."""

        if channel.id in self._by_id:
            return False
        if not (channel.is_member or channel.is_direct_message):
            return False
        self._by_id[channel.id] = channel
        return True

    def __contains__(self, channel_id: object) -> bool:
        return channel_id in self._by_id

    def __iter__(self) -> Iterator[Channel]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)


def name_direct_messages(channels: Iterable[Channel], directory: Iterable[User]) -> List[Channel]:
    """Name each direct message after its peer, leaving other channels untouched."""

    names = {user.id: user.name for user in directory}
    named: List[Channel] = []
    for channel in channels:
        if channel.is_direct_message:
            peer_name = names.get(channel.peer_user_id or "", UNKNOWN_PEER_NAME)
            channel = dataclasses.replace(channel, name=peer_name)
        named.append(channel)
    return named


def collect_joined_channels(
    client: SlackClient, logger: Optional[logging.Logger] = None
) -> List[Channel]:
    """Return every channel, group and direct message the token's owner is in.

    Any failing listing call aborts the collection, and so does a failing
    ``users.list``: direct messages cannot be named without the directory.
    The order of the returned channels is not meaningful.
    """

    logger = logger or logging.getLogger(__name__)
    joined = JoinedChannels()
    for method in LISTING_METHODS:
        try:
            records = client.list_channels(method)
        except (SlackApiError, SlackTransportError) as exc:
            logger.error("[collect_joined_channels] inquiring channels from %s failed, %s", method, exc)
            raise
        kept = sum(1 for record in records if joined.add(record))
        logger.debug("%s returned %d records, kept %d", method, len(records), kept)

    try:
        directory = client.get_members()
    except (SlackApiError, SlackTransportError) as exc:
        logger.error("[collect_joined_channels] obtaining members failed, %s", exc)
        raise DirectoryError(exc) from exc

    return name_direct_messages(joined, directory)


def find_channel(channels: Iterable[Channel], id_or_name: str) -> Channel:
    """Pick the channel whose id, or failing that whose name, is ``id_or_name``."""

    by_name: Optional[Channel] = None
    for channel in channels:
        if channel.id == id_or_name:
            return channel
        if by_name is None and channel.name == id_or_name:
            by_name = channel
    if by_name is None:
        raise ChannelNotFoundError(id_or_name)
    return by_name


__all__ = [
    "LISTING_METHODS",
    "UNKNOWN_PEER_NAME",
    "JoinedChannels",
    "collect_joined_channels",
    "find_channel",
    "name_direct_messages",
]
