"""Core orchestration logic for slack-cmd."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .channels import collect_joined_channels, find_channel
from .config import Settings
from .errors import ConfigError
from .models import Channel, Workspace
from .slack_client import ClientOptions, SlackClient
from .store import (
    WorkspaceStore,
    load_store,
    register_or_update,
    resolve_current,
    save_store,
    switch_current,
)


class SlackCmdService:
    """Operations behind each CLI verb.

    Every call loads the credential store afresh and builds a new client for
    the token it resolves; nothing is cached between calls.
    """

    def __init__(
        self,
        settings: Settings,
        client_options: Optional[ClientOptions] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings
        self.client_options = client_options or settings.client_options()
        self.logger = logger or logging.getLogger(__name__)

    def client_for(self, token: str) -> SlackClient:
        if not token:
            raise ConfigError("no workspace token is configured, register one with add-token")
        return SlackClient(token, self.client_options, self.logger)

    def load(self) -> WorkspaceStore:
        return load_store(self.settings.store_path)

    def save(self, store: WorkspaceStore) -> None:
        save_store(store, self.settings.store_path)

    # region Workspaces
    def fetch_workspace(self, token: str) -> Workspace:
        with self.client_for(token) as client:
            return client.obtain_workspace_info()

    def register(self, workspace: Workspace) -> WorkspaceStore:
        store = self.load()
        register_or_update(store, workspace)
        self.save(store)
        self.logger.info("registered workspace %s (%s)", workspace.name, workspace.id)
        return store

    def switch(self, selection: Union[int, str]) -> Workspace:
        store = self.load()
        workspace = switch_current(store, selection)
        self.save(store)
        self.logger.info("switched current workspace to %s", workspace.name)
        return workspace

    def current(self) -> Tuple[str, str]:
        return resolve_current(self.load())

    # endregion

    # region Channels
    def list_channels(self) -> Tuple[str, List[Channel]]:
        name, token = self.current()
        with self.client_for(token) as client:
            return name, collect_joined_channels(client, self.logger)

    def send_message(self, channel: str, text: str) -> Channel:
        _, token = self.current()
        with self.client_for(token) as client:
            target = find_channel(collect_joined_channels(client, self.logger), channel)
            client.send_message(target.id, text)
        return target

    def upload_file(
        self,
        channel: str,
        path: Path,
        title: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> Channel:
        _, token = self.current()
        with self.client_for(token) as client:
            target = find_channel(collect_joined_channels(client, self.logger), channel)
            client.upload_file(target.id, path, title=title, comment=comment)
        return target

    # endregion


__all__ = ["SlackCmdService"]
