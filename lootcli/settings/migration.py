"""
Masterlist source migration.

Older LOOT versions stored a masterlist as a Git repository URL plus a
branch (`repo` / `branch`); newer ones store a single `masterlistSource`
that is either a raw file URL or a local file path. These functions turn
any stored value into the current canonical source.

Order for repo + branch settings:
  1. superseded default branch   → DEFAULT_MASTERLIST_BRANCH
  2. VR game on base-game repo   → VR repository
  3. local non-bare Git repo     → <repo>/masterlist.yaml
  4. GitHub repository URL       → raw.githubusercontent.com file URL
  5. anything else               → None (caller keeps its current source)
"""

import logging
import re
from pathlib import Path
from typing import Optional

from lootcli.exceptions import MigrationAmbiguousError
from lootcli.games import GameId, catalog

__all__ = [
    "OLD_DEFAULT_BRANCHES",
    "OFFICIAL_MASTERLIST_REPOS",
    "migrate_branch",
    "migrate_repository_url",
    "migrate_known_official_url",
    "resolve_source",
    "github_raw_url",
    "is_local_repository",
    "is_branch_checked_out",
]

logger = logging.getLogger(__name__)

MASTERLIST_FILENAME = "masterlist.yaml"

# Former default branches of the official masterlist repositories
OLD_DEFAULT_BRANCHES = (
    "master", "v0.7", "v0.8", "v0.10", "v0.13", "v0.14", "v0.15", "v0.17", "v0.18",
)

OFFICIAL_MASTERLIST_REPOS = (
    "morrowind", "oblivion", "skyrim", "skyrimse", "skyrimvr",
    "fallout3", "falloutnv", "fallout4", "fallout4vr", "enderal",
)

_GITHUB_REPO_URL_RE = re.compile(
    r"^https://github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$", re.IGNORECASE
)

# (game, old repository URL) → repository URL (VR repos added in LOOT v0.17.0)
_REPOSITORY_REDIRECTS = {
    (GameId.TES5VR, "https://github.com/loot/skyrimse.git"): "https://github.com/loot/skyrimvr.git",
    (GameId.FO4VR, "https://github.com/loot/fallout4.git"): "https://github.com/loot/fallout4vr.git",
}


# ── Repo + branch settings ────────────────────────────────────────────────────

def migrate_branch(branch: str) -> str:
    if branch in OLD_DEFAULT_BRANCHES:
        logger.info(
            "Updating masterlist repository branch from %s to %s",
            branch, catalog.DEFAULT_MASTERLIST_BRANCH,
        )
        return catalog.DEFAULT_MASTERLIST_BRANCH
    return branch


def migrate_repository_url(game_id: GameId, url: str) -> str:
    new_url = _REPOSITORY_REDIRECTS.get((game_id, url))
    if new_url is None:
        return url
    logger.info("Updating masterlist repository URL from %s to %s", url, new_url)
    return new_url


def is_local_repository(location: str, filename: str = MASTERLIST_FILENAME) -> bool:
    """
    True if *location* is the root of a non-bare Git repository containing
    *filename*. HTTP(S) URLs are never local.
    """
    if location.startswith(("http://", "https://")):
        return False
    root = Path(location)
    return (root / filename).is_file() and (root / ".git" / "HEAD").is_file()


def is_branch_checked_out(repository: Path, branch: str) -> bool:
    head = repository / ".git" / "HEAD"
    try:
        with open(head, encoding="utf-8") as f:
            first_line = f.readline().rstrip("\r\n")
    except OSError:
        return False
    return first_line == f"ref: refs/heads/{branch}"


def github_raw_url(url: str, branch: str) -> str:
    """
    Rewrite a GitHub repository URL to the raw masterlist file URL.

    >>> github_raw_url("https://github.com/loot/skyrim.git", "v0.23")
    'https://raw.githubusercontent.com/loot/skyrim/v0.23/masterlist.yaml'

    Raises:
        MigrationAmbiguousError: *url* is not a GitHub repository URL.
    """
    m = _GITHUB_REPO_URL_RE.match(url)
    if not m:
        raise MigrationAmbiguousError(
            f"Cannot migrate masterlist repository settings as the URL {url} "
            "does not point to a repository on GitHub."
        )
    owner, repo = m.group(1), m.group(2)
    return f"https://raw.githubusercontent.com/{owner}/{repo}/{branch}/{MASTERLIST_FILENAME}"


def _migrate_repo_settings(game_id: GameId, url: str, branch: str) -> Optional[str]:
    branch = migrate_branch(branch)
    url = migrate_repository_url(game_id, url)

    if is_local_repository(url):
        repository = Path(url)
        if not is_branch_checked_out(repository, branch):
            logger.warning(
                "The URL %s is a local Git repository path but the configured "
                "branch %s is not checked out. LOOT will use the path as the "
                "masterlist source, but there may be unexpected differences in "
                "the loaded metadata if the %s branch is not manually checked "
                "out before the next time the masterlist is updated.",
                url, branch, branch,
            )
        return str(repository / MASTERLIST_FILENAME)

    try:
        return github_raw_url(url, branch)
    except MigrationAmbiguousError as exc:
        logger.warning("%s", exc)
        return None


# ── masterlistSource settings ─────────────────────────────────────────────────

def migrate_known_official_url(source: str) -> str:
    """Replace an official masterlist URL on a superseded branch with the current one."""
    for repo in OFFICIAL_MASTERLIST_REPOS:
        for branch in OLD_DEFAULT_BRANCHES:
            url = f"https://raw.githubusercontent.com/loot/{repo}/{branch}/{MASTERLIST_FILENAME}"
            if source == url:
                new_source = catalog.default_masterlist_url(repo)
                logger.info("Migrating masterlist source from %s to %s", source, new_source)
                return new_source
    return source


# ── Entry point ───────────────────────────────────────────────────────────────

def resolve_source(
    game_id: GameId,
    explicit_source: Optional[str] = None,
    legacy_url: Optional[str] = None,
    legacy_branch: Optional[str] = None,
) -> Optional[str]:
    """
    Produce the canonical masterlist source for one game entry.

    Returns None when there is nothing to migrate to: no explicit source,
    incomplete repo/branch settings, or a repository URL that is neither
    local nor on GitHub. The caller then keeps its current source.
    """
    if explicit_source is not None:
        return migrate_known_official_url(explicit_source)

    if legacy_url is None or legacy_branch is None:
        logger.debug("No masterlist source or repo/branch settings for %s", game_id.value)
        return None

    return _migrate_repo_settings(game_id, legacy_url, legacy_branch)
