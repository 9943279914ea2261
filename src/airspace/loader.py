"""Loading airspace documents from URLs and files.

Obtains the raw YAML bytes from the network or the filesystem and hands
them to the decoder. No retries are attempted; a failure raises
LoaderError with the underlying cause chained.

Typical usage:
    from airspace.loader import load_source

    features = load_source("https://gitlab.com/ahsparrow/airspace/-/raw/master/airspace.yaml")
    features = load_source("data/airspace.yaml")
"""

import logging
from pathlib import Path
from urllib import request
from urllib.error import URLError
from urllib.parse import urlparse

from airspace.errors import LoaderError
from airspace.model import Feature
from airspace.normaliser import decode

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0
URL_SCHEMES = ("http", "https", "file")


def is_url(source: str) -> bool:
    """Check whether a source string is a URL rather than a file path."""
    return urlparse(source).scheme in URL_SCHEMES


def read_url(url: str, timeout: float = DEFAULT_TIMEOUT_S) -> bytes:
    """Download a document.

    Args:
        url: Document URL
        timeout: Timeout in seconds

    Returns:
        Response body

    Raises:
        LoaderError: If the download fails
    """
    logger.info("Downloading airspace from %s", url)
    try:
        with request.urlopen(url, timeout=timeout) as response:
            content = response.read()
    except (URLError, OSError) as e:
        raise LoaderError(f"Failed to download {url}: {e}") from e

    logger.debug("Downloaded %d bytes from %s", len(content), url)
    return content


def read_file(path: str | Path) -> bytes:
    """Read a document from disk.

    Raises:
        LoaderError: If the file cannot be read
    """
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise LoaderError(f"Failed to read {path}: {e}") from e


def read_source(source: str | Path, timeout: float = DEFAULT_TIMEOUT_S) -> bytes:
    """Read a document from a URL or a file path."""
    if isinstance(source, str) and is_url(source):
        return read_url(source, timeout)
    return read_file(source)


def load_url(url: str, timeout: float = DEFAULT_TIMEOUT_S) -> list[Feature]:
    """Download and decode an airspace document.

    Raises:
        LoaderError: If the download fails
        AirspaceDecodeError: If the document is malformed
    """
    return decode(read_url(url, timeout))


def load_file(path: str | Path) -> list[Feature]:
    """Read and decode an airspace document from disk.

    Raises:
        LoaderError: If the file cannot be read
        AirspaceDecodeError: If the document is malformed
    """
    return decode(read_file(path))


def load_source(source: str | Path, timeout: float = DEFAULT_TIMEOUT_S) -> list[Feature]:
    """Load features from a URL or a file path."""
    return decode(read_source(source, timeout))
