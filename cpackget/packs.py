"""Parsing of pack identifiers, pack file names and their version constraints."""

from __future__ import annotations

import enum
import logging
import os
import re
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import BadPackNameError

log = logging.getLogger(__name__)

_NAME = r"[\-_A-Za-z0-9]+"
_VERSION = (
    r"(?:\d+)\.(?:\d+)\.(?:\d+)"
    r"(?:-(?:(?:\d+|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:\d+|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?:[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)

_NAME_RE = re.compile(_NAME, re.ASCII)
_VERSION_RE = re.compile(_VERSION, re.ASCII)

# Vendor.Pack.x.y.z.pack, Vendor.Pack.x.y.z.zip or Vendor.Pack.pdsc
_PACK_FILE_NAME_RE = re.compile(
    rf"(?P<vendor>{_NAME})\.(?P<pack>{_NAME})\."
    rf"(?:(?P<version>{_VERSION})\.(?P<ext>pack|zip)|(?P<pdsc>pdsc))",
    re.ASCII,
)

# Vendor.Pack or Vendor.Pack.x.y.z
_DOTTED_PACK_ID_RE = re.compile(
    rf"(?P<vendor>{_NAME})\.(?P<pack>{_NAME})(?:\.(?P<version>{_VERSION}))?",
    re.ASCII,
)

# Vendor::Pack, optionally followed by @, @^, @~, @>= or >= and a version or "latest"
_LEGACY_PACK_ID_RE = re.compile(
    rf"(?P<vendor>{_NAME})::(?P<pack>{_NAME})"
    rf"(?:(?P<modifier>@|@\^|@~|@>=|>=)(?P<version>{_VERSION}|latest))?",
    re.ASCII,
)

# Vendor.Pack.a.b.c:x.y.z
_RANGE_RE = re.compile(r"([\-_A-Za-z0-9]+\.){4}[\-_A-Za-z0-9]+:")
# Vendor.Pack.latest
_LATEST_RE = re.compile(r"([\-_A-Za-z0-9]+\.){2}latest")

_URL_PREFIXES = ("http://", "https://", "file://")
_LOCAL_PREFIX = "file://localhost/"
_SEPARATORS = ("/", "\\") if os.name == "nt" else ("/",)


class VersionModifier(enum.IntEnum):
    """How the version of a pack id is to be interpreted."""

    EXACT = 0  # Vendor::Pack@x.y.z, Vendor.Pack.x.y.z
    LATEST = 1  # Vendor::Pack@latest
    ANY = 2  # Vendor::Pack, Vendor.Pack
    GREATER = 3  # Vendor::Pack@>=x.y.z
    GREATEST_COMPATIBLE = 4  # Vendor::Pack@^x.y.z, same major
    PATCH = 5  # Vendor::Pack@~x.y.z, same major and minor
    RANGE = 6  # Vendor.Pack.a.b.c:x.y.z, for pack requirements


_MODIFIERS = {
    "@": VersionModifier.EXACT,
    "@^": VersionModifier.GREATEST_COMPATIBLE,
    "@~": VersionModifier.PATCH,
    "@>=": VersionModifier.GREATER,
    ">=": VersionModifier.GREATER,
}


@dataclass
class PackInfo:
    """What a pack path or pack id says about a pack."""

    location: str = ""
    vendor: str = ""
    pack: str = ""
    version: str = ""
    extension: str = ""
    is_pack_id: bool = False
    version_modifier: VersionModifier = VersionModifier.EXACT


def is_pack_vendor_name_valid(name: str) -> bool:
    """Tell whether ``name`` is a valid pack vendor name."""
    return _NAME_RE.fullmatch(name) is not None


def is_pack_name_valid(name: str) -> bool:
    """Tell whether ``name`` is a valid pack name."""
    return _NAME_RE.fullmatch(name) is not None


def is_pack_version_valid(version: str) -> bool:
    """Tell whether ``version`` is a valid pack version."""
    return _VERSION_RE.fullmatch(version) is not None


def _split_path(path: str) -> tuple[str, str]:
    index = max(path.rfind(sep) for sep in _SEPARATORS)
    return path[: index + 1], path[index + 1:]


def _local_location(location: str) -> str:
    if os.path.isabs(location):
        location = os.path.normpath(location)
    else:
        location = os.path.abspath(os.path.join(os.getcwd(), location))
    return _LOCAL_PREFIX + location + os.sep


def extract_pack_info(pack_path: str) -> PackInfo:
    """Extract pack details from a file path, URL or pack id.

    Accepted forms include ``/path/Vendor.Pack.pdsc``,
    ``/path/Vendor.Pack.x.y.z.pack`` (or ``.zip``), URLs to such files,
    ``Vendor.Pack[.x.y.z]`` and ``Vendor::Pack[@|@^|@~|@>=|>=]x.y.z``.
    Raises ``BadPackNameError`` when none of them matches.
    """
    log.debug('Extracting pack info from "%s"', pack_path)

    max_version = ""
    if _RANGE_RE.search(pack_path):
        parts = pack_path.split(":")
        pack_path, max_version = parts[0], parts[1]

    # Requirement packages without a version ask for the latest one
    if _LATEST_RE.search(pack_path) and pack_path.endswith(".latest"):
        pack_path = pack_path[: -len(".latest")]

    location, pack_name = _split_path(pack_path)

    file_match = _PACK_FILE_NAME_RE.fullmatch(pack_name)
    if file_match is not None:
        if not location.startswith(_URL_PREFIXES):
            location = _local_location(location)
        # No backslashes allowed in locations
        location = location.replace("\\", "/")
        info = PackInfo(
            location=location,
            vendor=file_match["vendor"],
            pack=file_match["pack"],
            version=file_match["version"] or "",
            extension=file_match["ext"] or file_match["pdsc"],
        )
        log.debug(
            '"%s" is a file name or a URL with Vendor="%s", Pack="%s", Version="%s", '
            'Extension="%s", Location="%s"',
            pack_path, info.vendor, info.pack, info.version, info.extension, info.location,
        )
        return info

    info = PackInfo(is_pack_id=True, version_modifier=VersionModifier.ANY)

    dotted = _DOTTED_PACK_ID_RE.fullmatch(pack_name)
    if dotted is not None:
        info.vendor = dotted["vendor"]
        info.pack = dotted["pack"]
        if dotted["version"]:
            info.version = dotted["version"]
            if max_version:
                info.version += ":" + max_version
                info.version_modifier = VersionModifier.RANGE
            else:
                info.version_modifier = VersionModifier.EXACT
    else:
        legacy = _LEGACY_PACK_ID_RE.fullmatch(pack_name)
        if legacy is None:
            raise BadPackNameError()
        info.vendor = legacy["vendor"]
        info.pack = legacy["pack"]
        if legacy["version"]:
            info.version = legacy["version"]
            info.version_modifier = _MODIFIERS[legacy["modifier"]]
            if info.version == "latest":
                info.version_modifier = VersionModifier.LATEST

    log.debug(
        '"%s" is a packID with Vendor="%s", Pack="%s", Version="%s", VersionModifier="%s"',
        pack_path, info.vendor, info.pack, info.version, int(info.version_modifier),
    )
    return info


def format_pack_version(pack: Sequence[str]) -> str:
    """Render a ``[name, vendor, version]`` requirement as a pack id.

    ``latest`` gives ``Vendor::Name@latest``, ``x.y.z:_`` gives
    ``Vendor::Name@>=x.y.z``, ``x.y.z:x.y.z`` gives ``Vendor::Name@x.y.z`` and
    ``a.b.c:x.y.z`` gives ``Vendor::Name@a.b.c:x.y.z``.
    """
    name, vendor, version = pack[0], pack[1], pack[2]
    prefix = f"{vendor}::{name}"
    if version == "latest":
        return prefix + "@latest"
    minimum, separator, maximum = version.partition(":")
    if version.endswith("_"):
        return f"{prefix}@>={minimum}"
    if not separator:
        raise ValueError(f"version range expected, got {version!r}")
    maximum = maximum.split(":")[0]
    if minimum == maximum:
        return f"{prefix}@{minimum}"
    return f"{prefix}@{minimum}:{maximum}"