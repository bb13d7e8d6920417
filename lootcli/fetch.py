"""
fetch.py
Bring a masterlist source to a local file.

  • http(s) URL   → streamed download with requests
  • anything else → treated as a local file path and copied
"""

import logging
import shutil
from pathlib import Path

import requests

from lootcli import __version__
from lootcli.exceptions import FetchFailureError

__all__ = ["fetch_file", "fetch_masterlist"]

logger = logging.getLogger(__name__)

# Default chunk size for streaming downloads (64 KB)
_CHUNK_SIZE = 64 * 1024

# Connect timeout only; a slow transfer is not interrupted
_CONNECT_TIMEOUT = 30.0

USER_AGENT = f"lootcli/{__version__}"


def fetch_file(url: str, dest: Path) -> Path:
    """
    Download *url* into *dest*.

    The body is written to a sibling temporary file and moved over *dest*
    only once complete, so a failed download never truncates an existing
    masterlist.

    Raises:
        FetchFailureError: Transport error or non-2xx response.
    """
    tmp = dest.with_name(dest.name + ".part")
    try:
        with requests.get(
            url,
            headers={"User-Agent": USER_AGENT},
            stream=True,
            timeout=(_CONNECT_TIMEOUT, None),
        ) as resp:
            resp.raise_for_status()
            with open(tmp, "wb") as f:
                for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        tmp.replace(dest)
    except (requests.RequestException, OSError) as exc:
        tmp.unlink(missing_ok=True)
        raise FetchFailureError(f"Failed to download {url}: {exc}") from exc

    logger.debug("Downloaded %s to %s", url, dest)
    return dest


def fetch_masterlist(source: str, dest: Path) -> Path:
    """Fetch a masterlist source (URL or local path) into *dest*."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    if source.startswith(("http://", "https://")):
        return fetch_file(source, dest)

    try:
        shutil.copyfile(source, dest)
    except OSError as exc:
        raise FetchFailureError(f"Failed to copy masterlist from {source}: {exc}") from exc
    logger.debug("Copied %s to %s", source, dest)
    return dest
