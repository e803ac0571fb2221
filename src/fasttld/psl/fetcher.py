"""Download and cache management for the Public Suffix List."""
import logging
import os
import shutil
import tempfile
from datetime import datetime, timezone, timedelta
from pathlib import Path
from typing import Optional, Sequence

import httpx

from fasttld.errors import RefreshFailedError

logger = logging.getLogger(__name__)

SNAPSHOT_FILE_NAME = "public_suffix_list.dat"


def bundled_snapshot_path() -> Path:
    """Path to the suffix list snapshot shipped with the package."""
    return Path(__file__).parent.parent / "data" / SNAPSHOT_FILE_NAME


def is_cache_stale(path: Path, max_age: timedelta) -> bool:
    """Check if the cache file is missing or older than ``max_age``."""
    try:
        mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    except OSError:
        return True
    return datetime.now(timezone.utc) - mtime > max_age


def download_suffix_list(
    mirrors: Sequence[str],
    timeout: float = 10.0,
    client: Optional[httpx.Client] = None
) -> str:
    """
    Fetch the suffix list from the first mirror that answers with 200.

    Args:
        mirrors: URLs tried in order
        timeout: Per-request timeout in seconds
        client: Optional preconfigured client (proxies, test transports)

    Returns:
        Suffix list text

    Raises:
        RefreshFailedError: If every mirror fails
    """
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    try:
        for mirror in mirrors:
            try:
                response = client.get(mirror, timeout=timeout)
            except httpx.HTTPError as e:
                logger.warning(f"Suffix list download from {mirror} failed: {e}")
                continue

            if response.status_code != 200:
                logger.warning(
                    f"Suffix list download from {mirror} failed, HTTP status code: {response.status_code}"
                )
                continue

            logger.info(f"Downloaded suffix list from {mirror}")
            return response.text
    finally:
        if owns_client:
            client.close()

    raise RefreshFailedError("Failed to fetch any Public Suffix List from all mirrors")


def write_cache(path: Path, text: str) -> None:
    """Atomically replace the cache file with ``text``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".psl-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def update_cache(
    path: Path,
    mirrors: Sequence[str],
    timeout: float = 10.0,
    client: Optional[httpx.Client] = None
) -> None:
    """
    Download the suffix list into the cache file.

    Raises:
        RefreshFailedError: If every mirror fails or the cache cannot be written
    """
    text = download_suffix_list(mirrors, timeout=timeout, client=client)
    try:
        write_cache(path, text)
    except OSError as e:
        raise RefreshFailedError(f"Cannot write suffix list cache {path}: {e}") from e
    logger.info(f"Public Suffix List updated at {path}")


def seed_cache_from_snapshot(path: Path) -> None:
    """Copy the bundled snapshot to ``path`` if nothing is cached yet."""
    if path.exists():
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    # copy2 keeps the snapshot mtime, so the next start still tries a download
    shutil.copy2(bundled_snapshot_path(), path)
    logger.info(f"Seeded suffix list cache {path} from bundled snapshot")
