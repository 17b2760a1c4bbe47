"""File system helpers."""

from __future__ import annotations

import logging
import os
import re
import stat
import sys

from .errors import FailedCreatingDirectoryError

log = logging.getLogger(__name__)

FILE_MODE_RO = 0o444
FILE_MODE_RW = 0o666
DIR_MODE_RO = 0o555
DIR_MODE_RW = 0o777

_WINDOWS_LEADING_SLASH = re.compile(r"^[\\/][a-zA-Z]:[\\/]")


def file_exists(path: str | os.PathLike) -> bool:
    """Tell whether ``path`` exists and is not a directory."""
    try:
        info = os.stat(path)
    except (OSError, ValueError):
        return False
    return not stat.S_ISDIR(info.st_mode)


def dir_exists(path: str | os.PathLike) -> bool:
    """Tell whether ``path`` is an existing directory."""
    return os.path.isdir(path)


def ensure_dir(path: str | os.PathLike) -> None:
    """Create the directory tree ``path`` if it does not exist yet."""
    log.debug('Ensuring "%s" directory exists', path)
    try:
        os.makedirs(path, 0o755, exist_ok=True)
    except OSError as err:
        log.error(err)
        raise FailedCreatingDirectoryError() from err


def same_file(source: str | os.PathLike, destination: str | os.PathLike) -> bool:
    """Tell whether both paths name the same file."""
    if source == destination:
        return True
    try:
        return os.path.samefile(source, destination)
    except (OSError, ValueError):
        return False


def list_dir(directory: str, pattern: str) -> list[str]:
    """List the entries of ``directory`` (not recursively) whose path matches ``pattern``."""
    regex = re.compile(pattern) if pattern else None
    log.debug('Listing files and directories in "%s" that match "%s"', directory, pattern or ".*")
    if not stat.S_ISDIR(os.lstat(directory).st_mode):
        return []
    paths = (os.path.normpath(os.path.join(directory, name)) for name in sorted(os.listdir(directory)))
    return [path for path in paths if regex is None or regex.search(path)]


def touch_file(path: str | os.PathLike) -> None:
    """Create (or truncate) ``path`` and set its timestamps to now."""
    with open(path, "wb"):
        pass
    os.utime(path, None)


def is_empty(directory: str | os.PathLike) -> bool:
    """Tell whether ``directory`` is an accessible, empty directory."""
    try:
        with os.scandir(directory) as entries:
            return next(entries, None) is None
    except OSError:
        return False


def clean_path(path: str) -> str:
    """Normalise ``path``, dropping a slash before a Windows drive letter."""
    cleaned = os.path.normpath(path)
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if _WINDOWS_LEADING_SLASH.match(cleaned):
        cleaned = cleaned[1:]
    return cleaned


def _chmod_quietly(path: str | os.PathLike, mode: int) -> None:
    try:
        os.chmod(path, mode)
    except OSError:
        pass


def set_read_only(path: str | os.PathLike) -> None:
    """Make a file or directory read-only."""
    try:
        is_dir = stat.S_ISDIR(os.stat(path).st_mode)
    except OSError:
        return
    _chmod_quietly(path, DIR_MODE_RO if is_dir else FILE_MODE_RO)


def set_read_only_recursive(path: str | os.PathLike) -> None:
    """Make a directory tree read-only, leaves first."""
    if not os.path.isdir(path):
        return
    dirs: list[str] = []
    for dirpath, _dirnames, filenames in os.walk(path):
        dirs.append(dirpath)
        for name in filenames:
            _chmod_quietly(os.path.join(dirpath, name), FILE_MODE_RO)
    for directory in sorted(dirs, key=lambda d: d.count("/") + d.count("\\"), reverse=True):
        _chmod_quietly(directory, DIR_MODE_RO)


def unset_read_only(path: str | os.PathLike) -> None:
    """Make a file or directory writable again."""
    try:
        is_dir = stat.S_ISDIR(os.stat(path).st_mode)
    except OSError:
        return
    _chmod_quietly(path, DIR_MODE_RW if is_dir else FILE_MODE_RW)


def unset_read_only_recursive(path: str | os.PathLike) -> None:
    """Make a whole directory tree writable again."""
    if not os.path.isdir(path):
        return
    _chmod_quietly(path, DIR_MODE_RW)
    for dirpath, dirnames, filenames in os.walk(path):
        for name in dirnames:
            _chmod_quietly(os.path.join(dirpath, name), DIR_MODE_RW)
        for name in filenames:
            _chmod_quietly(os.path.join(dirpath, name), FILE_MODE_RW)


def is_terminal_interactive() -> bool:
    """Tell whether standard output is a character device."""
    try:
        return stat.S_ISCHR(os.fstat(sys.stdout.fileno()).st_mode)
    except (AttributeError, OSError, ValueError):
        return False