#!/usr/bin/env python3
"""
Slack Notifier

Posts the monthly summary to a Slack channel through the Web API, either as
a plain message or as the comment on the uploaded chart image.
"""

import logging
from pathlib import Path
from typing import Any

import requests

from ..core.config import SlackConfig
from ..core.errors import ConfigurationError, SlackError

logger = logging.getLogger(__name__)


class SlackNotifier:
    """Minimal Slack Web API client for one channel."""

    def __init__(
        self,
        bot_token: str,
        channel_id: str,
        base_url: str = "https://slack.com/api",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.channel_id = channel_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {bot_token}"})

    @classmethod
    def from_config(cls, config: SlackConfig) -> "SlackNotifier":
        if not config.is_configured:
            raise ConfigurationError("SLACK_BOT_TOKEN and SLACK_CHANNEL_ID must both be set")
        return cls(
            bot_token=config.bot_token,
            channel_id=config.channel_id,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    def _call(self, method: str, **kwargs: Any) -> dict[str, Any]:
        """Call a Web API method and return its payload, raising on ``ok: false``."""
        try:
            resp = self.session.post(f"{self.base_url}/{method}", timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise SlackError(f"Slack {method} failed: {e}") from e

        if not data.get("ok"):
            raise SlackError(f"Slack {method} error: {data.get('error', data)}")
        return data

    def post_message(self, text: str) -> str:
        """
        Post a text message to the channel.

        Returns:
            Message timestamp
        """
        data = self._call(
            "chat.postMessage",
            json={"channel": self.channel_id, "text": text},
            headers={"Content-Type": "application/json; charset=utf-8"},
        )
        logger.info("Posted summary to Slack channel %s", self.channel_id)
        return data.get("ts", "")

    def upload_file(self, path: Path, initial_comment: str = "", title: str | None = None) -> str:
        """
        Upload an image and share it in the channel with a comment.

        Uses the external upload flow: reserve an upload URL, send the bytes,
        then complete the upload into the channel.

        Returns:
            Slack file id
        """
        content = path.read_bytes()

        reserved = self._call(
            "files.getUploadURLExternal",
            data={"filename": path.name, "length": len(content)},
        )
        upload_url = reserved["upload_url"]
        file_id = reserved["file_id"]

        try:
            upload = self.session.post(upload_url, data=content, timeout=self.timeout)
            upload.raise_for_status()
        except requests.RequestException as e:
            raise SlackError(f"Uploading {path.name} to Slack failed: {e}") from e

        self._call(
            "files.completeUploadExternal",
            json={
                "files": [{"id": file_id, "title": title or path.stem}],
                "channel_id": self.channel_id,
                "initial_comment": initial_comment,
            },
            headers={"Content-Type": "application/json; charset=utf-8"},
        )
        logger.info("Shared %s in Slack channel %s", path.name, self.channel_id)
        return file_id

    def send_report(self, summary: str, chart_file: Path | None = None) -> None:
        """Send the summary, attached to the chart when one was rendered."""
        if chart_file is not None:
            self.upload_file(chart_file, initial_comment=summary, title=chart_file.stem)
        else:
            self.post_message(summary)
