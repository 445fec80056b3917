"""Download the argocd CLI release binary."""

import logging
import os
from pathlib import Path

import requests

from argocd_diff.clients.exceptions import CliDownloadError

logger = logging.getLogger(__name__)

RELEASE_URL = "https://github.com/argoproj/argo-cd/releases/download/{version}/argocd-{arch}-amd64"
DEFAULT_CLI_PATH = "bin/argo"
DOWNLOAD_TIMEOUT = 120
CHUNK_SIZE = 1 << 16


def release_url(version: str, arch: str) -> str:
    return RELEASE_URL.format(version=version, arch=arch)


def install_cli(
    version: str,
    arch: str = "linux",
    dest: str = DEFAULT_CLI_PATH,
    session: requests.Session | None = None,
) -> str:
    """Download the CLI for ``version`` to ``dest`` and make it executable.

    Returns:
        The path of the installed binary.

    Raises:
        CliDownloadError: If no version is given or the download fails.
    """
    if not version:
        raise CliDownloadError("argocd-version is required to download the CLI")

    url = release_url(version, arch)
    target = Path(dest)
    target.parent.mkdir(parents=True, exist_ok=True)
    http = session or requests.Session()
    logger.info("Downloading argocd %s from %s", version, url)

    try:
        with http.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT) as response:
            response.raise_for_status()
            with open(target, "wb") as fh:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    fh.write(chunk)
    except requests.RequestException as exc:
        target.unlink(missing_ok=True)
        raise CliDownloadError(f"Failed to download {url}: {exc}") from exc

    os.chmod(target, 0o755)
    return str(target)
