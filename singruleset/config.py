"""Reading the rule-set configuration and locating the working files."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


@dataclass(frozen=True)
class BlocklistEntry:
    """A named list and the URL it is fetched from."""

    name: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "BlocklistEntry":
        if not isinstance(data, dict):
            raise ValueError(f"blocklist entry must be an object, got {data!r}")
        name = data.get("name") or ""
        url = data.get("url") or ""
        if not isinstance(name, str) or not isinstance(url, str):
            raise ValueError(f"blocklist entry fields must be strings: {data!r}")
        return cls(name=name, url=url)


def _entries(data: dict, key: str) -> list[BlocklistEntry]:
    raw = data.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"{key} must be a list, got {raw!r}")
    return [BlocklistEntry.from_json(item) for item in raw]


@dataclass
class Config:
    """The AdGuard block lists and IP lists to fetch and convert."""

    adguard_blocklists: list[BlocklistEntry] = field(default_factory=list)
    ip_lists: list[BlocklistEntry] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "Config":
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        return cls(
            adguard_blocklists=_entries(data, "Adguard_Blocklists"),
            ip_lists=_entries(data, "IP_Lists"),
        )

    def mappings(self) -> tuple[dict[str, str], dict[str, str]]:
        """Return name-to-URL maps for the AdGuard lists and the IP lists."""
        adguard = {entry.name: entry.url for entry in self.adguard_blocklists}
        ip_lists = {entry.name: entry.url for entry in self.ip_lists}
        return adguard, ip_lists

    def log_summary(self) -> None:
        """Log the name and URL of every configured list."""
        for entry in self.adguard_blocklists:
            logger.info("Adguard Blocklist Name: %s", entry.name)
            logger.info("Adguard Blocklist URL: %s", entry.url)
        for entry in self.ip_lists:
            logger.info("IP List Name: %s", entry.name)
            logger.info("IP List URL: %s", entry.url)


def read_config(file_path: str | os.PathLike) -> Config:
    """Load a configuration file.

    Raises OSError when the file cannot be opened and ValueError when its
    contents are not a valid configuration.
    """
    with open(file_path, encoding="utf-8") as handle:
        data = json.load(handle)
    return Config.from_json(data)


class Workspace:
    """The working directory and the configuration file inside it."""

    def __init__(self, work_path=None, config_path=None):
        self._work_path = Path(work_path) if work_path is not None else None
        self._config_path = Path(config_path) if config_path is not None else None

    @property
    def work_path(self) -> Path:
        if self._work_path is None:
            return Path(os.getcwd())
        return self._work_path

    @property
    def config_path(self) -> Path:
        if self._config_path is None:
            return self.work_path / CONFIG_FILE_NAME
        return self._config_path

    @staticmethod
    def _existing(path) -> Path:
        candidate = Path(path)
        if not candidate.exists():
            raise FileNotFoundError(f"path does not exist: {path}")
        return candidate

    def use_work_path(self, path) -> None:
        """Make an existing directory the working directory."""
        self._work_path = self._existing(path)

    def use_config_path(self, path) -> None:
        """Use an existing file as the configuration file."""
        self._config_path = self._existing(path)