"""
fetch_raw.py
-------------
Downloads the GCAT satellite catalog as one text blob, following
redirects by hand (capped), and fingerprints it with SHA256.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Optional

import requests
from rich.console import Console

from gcat_ingest.config import FETCH_TIMEOUT_S, MAX_REDIRECTS
from gcat_ingest.errors import NetworkError

console = Console()
log = logging.getLogger(__name__)

REDIRECT_STATUSES = {301, 302, 303, 307, 308}


def sha256_text(text: str) -> str:
    """Compute SHA256 hash of the decoded catalog text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def fetch_text(
    url: str,
    session: Optional[requests.Session] = None,
    max_redirects: int = MAX_REDIRECTS,
    timeout: float = FETCH_TIMEOUT_S,
) -> str:
    """GET url and return the whole body; raises NetworkError on failure."""
    if session is None:
        with requests.Session() as owned:
            return _fetch(owned, url, max_redirects, timeout)
    return _fetch(session, url, max_redirects, timeout)


def _fetch(session, url: str, max_redirects: int, timeout: float) -> str:
    target = url
    for hop in range(max_redirects + 1):
        console.print(f"Downloading from [cyan]{target}[/cyan] ...")
        try:
            resp = session.get(target, timeout=timeout, allow_redirects=False)
        except requests.RequestException as e:
            raise NetworkError(f"request to {target} failed: {e}") from e

        if resp.status_code in REDIRECT_STATUSES:
            location = resp.headers.get("Location")
            if not location:
                raise NetworkError(f"HTTP {resp.status_code} without Location header", resp.status_code)
            target = requests.compat.urljoin(target, location)
            log.info("Redirect %s (%d/%d) -> %s", resp.status_code, hop + 1, max_redirects, target)
            continue

        if not 200 <= resp.status_code < 300:
            raise NetworkError(f"HTTP {resp.status_code}", resp.status_code)

        resp.encoding = "utf-8"
        text = resp.text
        console.print(f"Downloaded {len(text) / 1024 / 1024:.2f} MB")
        log.info("Fetched %s (%d chars)", target, len(text))
        return text

    raise NetworkError(f"too many redirects (> {max_redirects}) starting from {url}")


def read_local(path: Path) -> str:
    """Read a previously downloaded catalog instead of hitting the network."""
    console.print(f"Reading local catalog [cyan]{path}[/cyan] ...")
    text = Path(path).read_text(encoding="utf-8")
    log.info("Read %s (%d chars)", path, len(text))
    return text
