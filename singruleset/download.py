"""Fetching list files over HTTP."""

from __future__ import annotations

import os
import shutil
import urllib.error
import urllib.request
from http import HTTPStatus
from pathlib import Path


class DownloadError(Exception):
    """A list file could not be fetched."""


def download_file(url: str, file_path: str | os.PathLike) -> None:
    """Save the body at ``url`` to ``file_path``.

    The target file is created before the request is made. Any status other
    than 200 raises DownloadError.
    """
    with Path(file_path).open("wb") as out:
        try:
            with urllib.request.urlopen(url) as response:
                if response.status != HTTPStatus.OK:
                    raise DownloadError(f"HTTP error: {response.status} {response.reason}")
                shutil.copyfileobj(response, out)
        except urllib.error.HTTPError as exc:
            raise DownloadError(f"HTTP error: {exc.code} {exc.reason}") from exc
        except urllib.error.URLError as exc:
            raise DownloadError(f"failed to fetch {url}: {exc.reason}") from exc
        except ValueError as exc:
            raise DownloadError(f"failed to fetch {url}: {exc}") from exc