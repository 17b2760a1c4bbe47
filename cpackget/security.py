"""Guarded copying and archive extraction.

Copies are bounded in size and can be interrupted by the user. Archive members
whose names try to escape the destination directory are refused.
"""

from __future__ import annotations

import logging
import os
import zipfile
from typing import BinaryIO

from .errors import (
    FailedCreatingFileError,
    FailedWritingToLocalFileError,
    FileTooBigError,
    InsecureZipFileNameError,
    TerminatedByUserError,
)
from .fsutils import ensure_dir
from .signals import should_abort

log = logging.getLogger(__name__)

MAX_DOWNLOAD_SIZE = 20 * 1024 * 1024 * 1024
"""Largest number of bytes a single copy may transfer (20G)."""

DOWNLOAD_BUFFER_SIZE = 4096
"""Number of bytes moved from source to destination per step."""


def secure_copy(dst, src) -> int:
    """Copy ``src`` into ``dst`` in small chunks and return the bytes copied.

    Raises ``TerminatedByUserError`` when the user asked to stop,
    ``FileTooBigError`` when more than ``MAX_DOWNLOAD_SIZE`` bytes arrive and
    ``FailedWritingToLocalFileError`` when reading or writing fails.
    """
    copied = 0
    while True:
        if should_abort():
            # Break the line after the user typed Ctrl+C
            print()
            raise TerminatedByUserError()

        try:
            chunk = src.read(DOWNLOAD_BUFFER_SIZE)
        except OSError as err:
            log.error(err)
            raise FailedWritingToLocalFileError() from err
        if not chunk:
            break

        try:
            dst.write(chunk)
        except OSError as err:
            log.error(err)
            raise FailedWritingToLocalFileError() from err

        copied += len(chunk)
        if copied > MAX_DOWNLOAD_SIZE:
            log.error("Attempted to copy a file over %d bytes", MAX_DOWNLOAD_SIZE)
            raise FileTooBigError()

    return copied


def secure_inflate_file(
    archive: zipfile.ZipFile,
    member: zipfile.ZipInfo | str,
    destination_dir: str | os.PathLike,
    strip_prefix: str,
) -> None:
    """Extract one archive member into ``destination_dir``.

    Names holding ``../`` or ``..\\`` are refused with
    ``InsecureZipFileNameError``. ``strip_prefix`` is removed from the front of
    the member name before extraction.
    """
    name = member.filename if isinstance(member, zipfile.ZipInfo) else member
    log.debug('Inflating "%s"', name)

    if "../" in name or "..\\" in name:
        raise InsecureZipFileNameError()

    file_name = name[len(strip_prefix):] if strip_prefix and name.startswith(strip_prefix) else name
    if not file_name:
        return
    if file_name[0] in ("/", "\\"):
        file_name = file_name[1:]
        if len(file_name) <= 1:
            return

    destination = os.fspath(destination_dir)

    if file_name.endswith(("/", "\\")):
        ensure_dir(os.path.join(destination, file_name))
        return

    # Some archives list parent directories separately, others do not,
    # so make sure the member's directory exists before writing it.
    file_dir = os.path.dirname(file_name)
    target_dir = os.path.join(destination, file_dir)
    if target_dir:
        ensure_dir(target_dir)

    file_path = os.path.join(destination, file_name)
    with archive.open(member) as reader:
        try:
            out: BinaryIO = open(file_path, "wb")
        except OSError as err:
            log.error(err)
            raise FailedCreatingFileError() from err
        with out:
            written = secure_copy(out, reader)
    log.debug("Inflated %d bytes", written)