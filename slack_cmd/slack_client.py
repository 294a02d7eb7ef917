"""HTTP client for interacting with Slack Web API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .errors import SlackApiError, SlackTransportError
from .models import Channel, User, Workspace

SLACK_API_BASE = "https://slack.com/api"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Listing responses populate one of these fields depending on the endpoint.
CHANNEL_RESULT_FIELDS = ("channels", "groups", "ims")


@dataclass(slots=True)
class ClientOptions:
    """Transport overrides recognised by :class:`SlackClient`."""

    base_url: str = SLACK_API_BASE
    http_client: Optional[httpx.Client] = None
    timeout: Optional[float] = None


class SlackClient:
    """Synchronous wrapper around the Slack Web API endpoints slack-cmd uses."""

    def __init__(
        self,
        token: str,
        options: Optional[ClientOptions] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not token:
            raise ValueError("invalid token")
        options = options or ClientOptions()
        self.token = token
        self.base_url = options.base_url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self._owns_client = options.http_client is None
        if options.http_client is not None:
            self._client = options.http_client
        elif options.timeout is not None:
            self._client = httpx.Client(timeout=options.timeout)
        else:
            self._client = httpx.Client()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SlackClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # region Transport
    def build_url(self, method: str) -> str:
        return f"{self.base_url}/{method}"

    def _headers(self, content_type: Optional[str] = FORM_CONTENT_TYPE) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.token}"}
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _send(self, method: str, request: httpx.Request) -> Dict[str, Any]:
        try:
            response = self._client.send(request)
        except httpx.HTTPError as exc:
            self.logger.error("[%s] request failed, %s", method, exc)
            raise SlackTransportError(method, str(exc)) from exc

        if response.status_code != httpx.codes.OK:
            reason = f"response status {response.status_code} {response.reason_phrase}"
            self.logger.error("[%s] %s", method, reason)
            raise SlackTransportError(method, reason)

        try:
            data = response.json()
        except ValueError as exc:
            self.logger.error("[%s] decoding json response failed, %s", method, exc)
            raise SlackTransportError(method, "malformed response body") from exc
        if not isinstance(data, dict):
            self.logger.error("[%s] response body is not a json object", method)
            raise SlackTransportError(method, "malformed response body")

        if not data.get("ok"):
            error = data.get("error") or "unknown_error"
            self.logger.error("[%s] request rejected by Slack, %s", method, error)
            raise SlackApiError(method, error)
        return data

    def get(self, method: str) -> Dict[str, Any]:
        request = self._client.build_request("GET", self.build_url(method), headers=self._headers())
        return self._send(method, request)

    def post(self, method: str, form: Mapping[str, str]) -> Dict[str, Any]:
        request = self._client.build_request(
            "POST", self.build_url(method), data=dict(form), headers=self._headers()
        )
        return self._send(method, request)

    def upload(self, method: str, path: Path, fields: Mapping[str, str]) -> Dict[str, Any]:
        """POST ``path`` as a multipart ``file`` part alongside ``fields``."""

        with path.open("rb") as handle:
            request = self._client.build_request(
                "POST",
                self.build_url(method),
                data=dict(fields),
                files={"file": (path.name, handle)},
                headers=self._headers(content_type=None),
            )
            # Read while the file is still open.
            request.read()
        return self._send(method, request)

    # endregion

    # region Slack methods
    def obtain_workspace_info(self) -> Workspace:
        data = self.get("team.info")
        return Workspace.from_team(data.get("team") or {}, self.token)

    def get_members(self) -> List[User]:
        data = self.get("users.list")
        return [User.from_member(member) for member in data.get("members") or []]

    def list_channels(self, method: str) -> List[Channel]:
        data = self.get(method)
        for result_field in CHANNEL_RESULT_FIELDS:
            records = data.get(result_field) or []
            if records:
                return [Channel.from_record(record) for record in records]
        return []

    def send_message(self, channel_id: str, text: str) -> None:
        self.post("chat.postMessage", {"channel": channel_id, "text": text, "as_user": "true"})

    def upload_file(
        self,
        channel_id: str,
        path: Path,
        *,
        title: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> None:
        fields: Dict[str, str] = {}
        if title:
            fields["title"] = title
        if comment:
            fields["initial_comment"] = comment
        fields["channels"] = channel_id
        fields["token"] = self.token
        self.upload("files.upload", Path(path), fields)

    # endregion


__all__ = ["ClientOptions", "SlackClient", "SLACK_API_BASE", "CHANNEL_RESULT_FIELDS"]
