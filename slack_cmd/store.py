"""Registered workspaces and the current workspace token, kept in a TOML file.

Data format::

    current_workspace_token = "xoxp-a"

    [[workspaces]]
    id = "T000A"
    name = "workspace A"
    domain = "foo-bar"
    token = "xoxp-a"

The whole file is read at the start of a command and rewritten in full on
save. Concurrent invocations are not coordinated; the last write wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .errors import ConfigError, WorkspaceNotFoundError
from .models import Workspace

DEFAULT_STORE_FILE = ".slack_uploader.toml"

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WorkspaceStore:
    workspaces: List[Workspace] = field(default_factory=list)
    current_workspace_token: str = field(default="", repr=False)


def default_store_path() -> Path:
    return Path.home() / DEFAULT_STORE_FILE


def _require_str(record: dict, key: str, *, required: bool = True) -> str:
    value = record.get(key)
    if value is None and not required:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"workspace entry has no valid {key!r}")
    return value


def _parse(text: str) -> WorkspaceStore:
    try:
        data: Any = tomlkit.parse(text).unwrap()
    except TOMLKitError as exc:
        raise ConfigError(f"malformed credential store: {exc}") from exc

    token = data.get("current_workspace_token", "")
    if not isinstance(token, str):
        raise ConfigError("current_workspace_token must be a string")
    records = data.get("workspaces", [])
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ConfigError("workspaces must be an array of tables")

    workspaces = [
        Workspace(
            id=_require_str(record, "id"),
            name=_require_str(record, "name"),
            domain=_require_str(record, "domain", required=False),
            token=_require_str(record, "token"),
        )
        for record in records
    ]
    seen: set[str] = set()
    for workspace in workspaces:
        if workspace.id in seen:
            raise ConfigError(f"workspace id {workspace.id!r} is registered more than once")
        seen.add(workspace.id)
    return WorkspaceStore(workspaces=workspaces, current_workspace_token=token)


def dumps_store(store: WorkspaceStore) -> str:
    doc = tomlkit.document()
    doc.add("current_workspace_token", store.current_workspace_token)
    if store.workspaces:
        entries = tomlkit.aot()
        for workspace in store.workspaces:
            entry = tomlkit.table()
            entry.add("id", workspace.id)
            entry.add("name", workspace.name)
            entry.add("domain", workspace.domain)
            entry.add("token", workspace.token)
            entries.append(entry)
        doc.add("workspaces", entries)
    return tomlkit.dumps(doc)


def load_store(path: Path) -> WorkspaceStore:
    """Read the store at ``path``; a missing file is an empty store."""

    if not path.exists():
        logger.debug("no credential store at %s yet", path)
        return WorkspaceStore()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        logger.error("[load_store] failed in decoding %s", path)
        raise ConfigError(f"malformed credential store: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read credential store {path}: {exc}") from exc
    try:
        return _parse(text)
    except ConfigError:
        logger.error("[load_store] failed in decoding %s", path)
        raise


def save_store(store: WorkspaceStore, path: Path) -> None:
    """Overwrite ``path`` with ``store``, creating parent directories as needed."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps_store(store), encoding="utf-8")
    except OSError as exc:
        logger.error("[save_store] writing %s failed, %s", path, exc)
        raise ConfigError(f"cannot write credential store {path}: {exc}") from exc


def list_names(store: WorkspaceStore) -> List[str]:
    return [workspace.name for workspace in store.workspaces]


def resolve_current(store: WorkspaceStore) -> Tuple[str, str]:
    """Return the current workspace's name and token.

    The name is empty when no registered workspace owns the current token;
    the token is returned regardless.
    """

    for workspace in store.workspaces:
        if workspace.token == store.current_workspace_token:
            return workspace.name, store.current_workspace_token
    return "", store.current_workspace_token


def find_workspace(store: WorkspaceStore, workspace_id: str) -> Optional[int]:
    for index, workspace in enumerate(store.workspaces):
        if workspace.id == workspace_id:
            return index
    return None


def register_or_update(store: WorkspaceStore, workspace: Workspace) -> None:
    """Add ``workspace`` or refresh the registered one with the same id in place."""

    index = find_workspace(store, workspace.id)
    if index is None:
        store.workspaces.append(
            Workspace(id=workspace.id, name=workspace.name, domain=workspace.domain, token=workspace.token)
        )
    else:
        existing = store.workspaces[index]
        existing.name = workspace.name
        existing.domain = workspace.domain
        existing.token = workspace.token

    # The first registered workspace becomes the default.
    if not store.current_workspace_token:
        store.current_workspace_token = workspace.token


def _select(store: WorkspaceStore, selection: Union[int, str]) -> Workspace:
    if isinstance(selection, int):
        if 0 <= selection < len(store.workspaces):
            return store.workspaces[selection]
        raise WorkspaceNotFoundError(str(selection))

    index = find_workspace(store, selection)
    if index is not None:
        return store.workspaces[index]
    for workspace in store.workspaces:
        if workspace.name == selection:
            return workspace
    raise WorkspaceNotFoundError(selection)


def switch_current(store: WorkspaceStore, selection: Union[int, str]) -> Workspace:
    """Make the workspace picked by index, id or name the current one."""

    workspace = _select(store, selection)
    store.current_workspace_token = workspace.token
    return workspace


__all__ = [
    "DEFAULT_STORE_FILE",
    "WorkspaceStore",
    "default_store_path",
    "dumps_store",
    "find_workspace",
    "list_names",
    "load_store",
    "register_or_update",
    "resolve_current",
    "save_store",
    "switch_current",
]
