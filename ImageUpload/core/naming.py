"""
Storage key and public URL construction.

Keys look like ``uploads/1718000000000-k3j9x0a1bq2.png``: a prefix, the
upload time in epoch milliseconds, a random base36 token and the extension
of the client's filename.
"""

from __future__ import annotations

import re
import secrets
import time

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
TOKEN_LENGTH = 11

_SAFE_EXTENSION = re.compile(r"[A-Za-z0-9]+")


def file_extension(original_name: str) -> str:
    """Return the final dot-segment of ``original_name``, or ``""``.

    Anything that is not plain ASCII letters and digits is dropped so client
    input cannot smuggle path separators into the key.
    """
    _, dot, extension = original_name.rpartition(".")
    if not dot or not _SAFE_EXTENSION.fullmatch(extension):
        return ""
    return extension


def random_token(length: int = TOKEN_LENGTH) -> str:
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def build_object_key(original_name: str, prefix: str = "uploads") -> str:
    epoch_millis = time.time_ns() // 1_000_000
    return f"{prefix}/{epoch_millis}-{random_token()}.{file_extension(original_name)}"


def public_url(template: str, *, bucket: str, region: str, key: str) -> str:
    return template.format(bucket=bucket, region=region, key=key)
