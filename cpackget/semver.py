"""Semantic version comparison that tolerates leading zeros and range suffixes."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LEADING_ZEROS = re.compile(r"\.0*(\d+)")

_NUM = r"(?:0|[1-9][0-9]*)"
_PRE_IDENT = r"(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)"
_BUILD_IDENT = r"[0-9A-Za-z-]+"
_VERSION = re.compile(
    rf"v({_NUM})"
    rf"(?:\.({_NUM})"
    rf"(?:\.({_NUM})"
    rf"(?:-({_PRE_IDENT}(?:\.{_PRE_IDENT})*))?"
    rf"(?:\+({_BUILD_IDENT}(?:\.{_BUILD_IDENT})*))?"
    r")?)?"
)
_NUMERIC = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class _Version:
    major: str
    minor: str
    patch: str
    prerelease: str


def _parse(version: str) -> _Version | None:
    match = _VERSION.fullmatch(version)
    if match is None:
        return None
    major, minor, patch, prerelease, _build = match.groups()
    return _Version(major, minor or "0", patch or "0", prerelease or "")


def _compare_int(x: str, y: str) -> int:
    if x == y:
        return 0
    if (len(x), x) < (len(y), y):
        return -1
    return 1


def _compare_prerelease(x: str, y: str) -> int:
    if x == y:
        return 0
    if not x:
        return 1
    if not y:
        return -1
    xs, ys = x.split("."), y.split(".")
    for a, b in zip(xs, ys):
        if a == b:
            continue
        a_num = _NUMERIC.fullmatch(a) is not None
        b_num = _NUMERIC.fullmatch(b) is not None
        if a_num != b_num:
            return -1 if a_num else 1
        if a_num:
            return _compare_int(a, b)
        return -1 if a < b else 1
    return -1 if len(xs) < len(ys) else 1


def _compare(v: str, w: str) -> int:
    pv, pw = _parse(v), _parse(w)
    if pv is None and pw is None:
        return 0
    if pv is None:
        return -1
    if pw is None:
        return 1
    for a, b in ((pv.major, pw.major), (pv.minor, pw.minor), (pv.patch, pw.patch)):
        result = _compare_int(a, b)
        if result:
            return result
    return _compare_prerelease(pv.prerelease, pw.prerelease)


def _strip_leading_zeros(version: str) -> str:
    version = _LEADING_ZEROS.sub(r".\1", version)
    version = version.lstrip("0")
    if version.startswith("."):
        version = "0" + version
    return version


def _normalize(version: str) -> str:
    return ("v" + _strip_leading_zeros(version)).partition(":")[0]


def semver_compare(version1: str, version2: str) -> int:
    """Compare two versions, returning -1, 0 or 1; invalid versions sort lowest."""
    return _compare(_normalize(version1), _normalize(version2))


def semver_compare_range(version: str, vrange: str) -> int:
    """Compare a version to a ``low[:high]`` range: 0 inside, -1 below, 1 above."""
    low, found, high = vrange.partition(":")
    if found and high not in ("", "_") and semver_compare(version, high) > 0:
        return 1
    if low and semver_compare(version, low) < 0:
        return -1
    return 0


def semver_major(version: str) -> str:
    """Return the major number of a version, or an empty string if it is invalid."""
    parsed = _parse("v" + _strip_leading_zeros(version))
    return parsed.major if parsed else ""


def semver_major_minor(version: str) -> str:
    """Return ``major.minor`` of a version, or an empty string if it is invalid."""
    parsed = _parse("v" + _strip_leading_zeros(version))
    return f"{parsed.major}.{parsed.minor}" if parsed else ""


def semver_strip_meta(version: str) -> str:
    """Remove the ``+meta`` part of a version."""
    return version.partition("+")[0]