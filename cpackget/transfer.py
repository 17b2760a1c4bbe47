"""Copying, moving and downloading files."""

from __future__ import annotations

import contextlib
import http.client
import itertools
import logging
import os
import posixpath
import ssl
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass

from tqdm import tqdm

from .errors import (
    BadRequestError,
    ConnectionOfflineError,
    CpackgetError,
    FailedCreatingFileError,
    FailedDownloadingFileError,
    FailedWritingToLocalFileError,
)
from .fsutils import file_exists, is_terminal_interactive, same_file, unset_read_only
from .progress import EncodedProgress
from .security import secure_copy

log = logging.getLogger(__name__)


@dataclass
class Settings:
    """Process-wide options for transfers."""

    encoded_progress: bool = False
    skip_touch: bool = False
    user_agent: str = ""
    cache_dir: str = ""


settings = Settings()

_instance_numbers = itertools.count()


class _Tee:
    """File-like object passing every write on to several sinks."""

    def __init__(self, *sinks: Callable[[bytes], object]) -> None:
        self._sinks = sinks

    def write(self, data: bytes) -> int:
        for sink in self._sinks:
            sink(data)
        return len(data)


class _ResponseReader:
    """Reads an HTTP response, turning protocol failures into ``OSError``."""

    def __init__(self, response: http.client.HTTPResponse) -> None:
        self._response = response

    def read(self, size: int) -> bytes:
        try:
            return self._response.read(size)
        except http.client.HTTPException as err:
            raise OSError(str(err) or type(err).__name__) from err


def copy_file(source: str | os.PathLike, destination: str | os.PathLike) -> None:
    """Copy the contents of ``source`` into ``destination``, replacing it."""
    log.debug('Copying file from "%s" to "%s"', source, destination)
    if same_file(source, destination):
        return
    with open(source, "rb") as src, open(destination, "wb") as dst:
        secure_copy(dst, src)


def move_file(source: str | os.PathLike, destination: str | os.PathLike) -> None:
    """Move ``source`` to ``destination``, even if ``source`` is read-only."""
    log.debug('Moving file from "%s" to "%s"', source, destination)
    if same_file(source, destination):
        return
    unset_read_only(source)
    try:
        os.replace(source, destination)
    except OSError as err:
        log.error('Can\'t move file "%s" to "%s": %s', source, destination, err)
        raise


def _tls_context(url: str) -> ssl.SSLContext | None:
    # Certificate checks are skipped only for local HTTPS servers
    if "https://127.0.0.1" not in url:
        return None
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def download_file(url: str, timeout: int = 0) -> str:
    """Download ``url`` into the cache directory and return the local path.

    A file already in the cache is not downloaded again. ``timeout`` is in
    seconds; 0 means no timeout.
    """
    file_base = posixpath.basename(urllib.parse.urlparse(url).path)
    file_path = os.path.join(settings.cache_dir, file_base)
    log.debug("Downloading %s to %s", url, file_path)
    if file_exists(file_path):
        log.debug("Download not required, using the one from cache")
        return file_path

    headers = {"User-Agent": settings.user_agent} if settings.user_agent else {}
    request = urllib.request.Request(url, headers=headers, method="GET")
    try:
        response = urllib.request.urlopen(request, timeout=timeout or None, context=_tls_context(url))
    except urllib.error.HTTPError as err:
        err.close()
        log.debug("bad status: %s %s", err.code, err.reason)
        raise BadRequestError(f'"{url}": {BadRequestError.message}') from err
    except (urllib.error.URLError, http.client.HTTPException, ValueError, OSError) as err:
        log.error(err)
        raise FailedDownloadingFileError(f'"{url}": {FailedDownloadingFileError.message}') from err

    with response:
        if response.status != 200:
            log.debug("bad status: %s %s", response.status, response.reason)
            raise BadRequestError(f'"{url}": {BadRequestError.message}')

        try:
            out = open(file_path, "wb")
        except OSError as err:
            log.error(err)
            raise FailedCreatingFileError() from err

        log.info("Downloading %s...", file_base)
        length_header = response.headers.get("Content-Length")
        length = int(length_header) if length_header and length_header.isdigit() else -1

        try:
            with out, contextlib.ExitStack() as stack:
                sinks: list[Callable[[bytes], object]] = [out.write]
                if log.getEffectiveLevel() != logging.ERROR:
                    if settings.encoded_progress:
                        sinks.append(EncodedProgress(length, next(_instance_numbers), file_base).write)
                    elif is_terminal_interactive():
                        bar = stack.enter_context(
                            tqdm(
                                total=length if length >= 0 else None,
                                desc="I:",
                                unit="B",
                                unit_scale=True,
                                unit_divisor=1024,
                            )
                        )
                        sinks.append(lambda data: bar.update(len(data)))
                written = secure_copy(_Tee(*sinks), _ResponseReader(response))
                if length >= 0 and written < length:
                    log.error("Expected %d bytes, received %d", length, written)
                    raise FailedWritingToLocalFileError()
        except CpackgetError:
            with contextlib.suppress(OSError):
                os.remove(file_path)
            raise

    log.debug("Downloaded %d bytes", written)
    return file_path


def check_connection(url: str, timeout: int) -> None:
    """Check that ``url`` answers; raise ``ConnectionOfflineError`` otherwise."""
    status = "offline"
    try:
        response = urllib.request.urlopen(url, timeout=timeout or None)
    except urllib.error.HTTPError as err:
        response = err
    except (urllib.error.URLError, http.client.HTTPException, ValueError, OSError) as err:
        response = None
        if not settings.encoded_progress:
            log.info(err)

    if response is not None:
        with response:
            status = "online"
            if not settings.encoded_progress:
                code = response.status if hasattr(response, "status") else response.code
                log.info("Respond: %s:%s %s (%s)", code, code, response.reason, status)

    if settings.encoded_progress:
        log.info("[O:%s]", status)

    if status == "offline":
        raise ConnectionOfflineError()