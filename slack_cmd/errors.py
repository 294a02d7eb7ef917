"""Exceptions raised by slack-cmd."""

from __future__ import annotations


class SlackCmdError(Exception):
    """Base class for every error the command layer reports."""


class SlackTransportError(SlackCmdError):
    """The request failed before Slack could accept or reject it."""

    def __init__(self, method: str, reason: str) -> None:
        super().__init__(f"request to {method} failed: {reason}")
        self.method = method
        self.reason = reason


class SlackApiError(SlackCmdError):
    """Raised when Slack returns an error response."""

    def __init__(self, method: str, error: str) -> None:
        super().__init__(f"Slack API error for {method}: {error}")
        self.method = method
        self.error = error


class ConfigError(SlackCmdError):
    """The credential store or runtime settings are unusable."""


class ChannelNotFoundError(SlackCmdError):
    def __init__(self, channel: str) -> None:
        super().__init__(f"invalid channel name or id: {channel}")
        self.channel = channel


class WorkspaceNotFoundError(SlackCmdError):
    def __init__(self, selection: str) -> None:
        super().__init__(f"no registered workspace matches {selection!r}")
        self.selection = selection


class DirectoryError(SlackCmdError):
    """The user directory could not be fetched while collecting channels."""

    def __init__(self, cause: SlackCmdError) -> None:
        super().__init__(f"could not fetch the user directory: {cause}")
        self.cause = cause


__all__ = [
    "SlackCmdError",
    "SlackTransportError",
    "SlackApiError",
    "ConfigError",
    "ChannelNotFoundError",
    "WorkspaceNotFoundError",
    "DirectoryError",
]
