"""Small string helpers."""

from __future__ import annotations

import base64
import binascii
import logging
import random
import string

log = logging.getLogger(__name__)

_LETTERS = string.ascii_lowercase + string.ascii_uppercase


def is_base64(s: str) -> bool:
    """Tell whether ``s`` is valid standard, padded base64."""
    try:
        base64.b64decode(s.replace("\r", "").replace("\n", ""), validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def rand_string_bytes(n: int) -> str:
    """Return a random string of ``n`` ASCII letters."""
    return "".join(random.choices(_LETTERS, k=n))


def count_lines(content: str) -> int:
    """Count the line feeds in ``content``."""
    return content.count("\n")


def filter_pack_id(content: str, words: str) -> str:
    """Return the pack id (first word of ``content``) if it holds any of ``words``."""
    log.debug('Filtering by words "%s"', words)
    if not words or ":" in words or "@" in words:
        return ""
    target = content.split(" ")[0]
    if any(word in target for word in words.split(" ")):
        return target
    return ""