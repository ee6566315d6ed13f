"""Encoding of fork identity into fork directory names.

A fork directory is named::

    rerost-fork-<base-name>-<timestamp-ns>-<encoded-source-path>

The encoded source path is always the last ``-`` separated field, so the
encoding alphabet must never contain ``-``. RFC 4648 base32 (``A-Z``, ``2-7``
and ``=`` padding) satisfies that and round-trips arbitrary path bytes.
"""

import base64
import os
from typing import Union

from .exceptions import DecodeError, InvalidNameError


FORK_DIR_PREFIX = "rerost-fork-"
FIELD_SEPARATOR = "-"
MIN_NAME_FIELDS = 3

PathLike = Union[str, "os.PathLike[str]"]


def encode_source_path(source_path: PathLike) -> str:
    """Encode an absolute path into a token safe to embed in a fork name.

    Args:
        source_path: Absolute path of the source directory

    Returns:
        Base32 token containing no field separators
    """
    raw = os.fsencode(source_path)
    return base64.b32encode(raw).decode("ascii")


def decode_source_path(token: str) -> str:
    """Decode a token produced by :func:`encode_source_path`.

    Args:
        token: Encoded source path

    Returns:
        The original source path

    Raises:
        DecodeError: If the token is empty, contains characters outside the
            base32 alphabet, or has missing or truncated padding
    """
    if not token:
        raise DecodeError("empty source path token")

    try:
        raw = base64.b32decode(token)
    except ValueError as e:
        raise DecodeError(f"invalid source path token {token!r}: {e}") from e

    return os.fsdecode(raw)


def build_fork_name(base_name: str, source_path: PathLike, now_ns: int) -> str:
    """Compose a fork directory name."""
    encoded = encode_source_path(source_path)
    return f"{FORK_DIR_PREFIX}{base_name}{FIELD_SEPARATOR}{now_ns}{FIELD_SEPARATOR}{encoded}"


def parse_source_path(name: str) -> str:
    """Recover the source directory path from a fork directory name.

    Raises:
        InvalidNameError: If the name has fewer than three fields
        DecodeError: If the last field is not a valid token
    """
    fields = name.split(FIELD_SEPARATOR)
    if len(fields) < MIN_NAME_FIELDS:
        raise InvalidNameError(f"invalid fork directory name format: {name!r}")

    return decode_source_path(fields[-1])


def is_fork_name(name: str) -> bool:
    return name.startswith(FORK_DIR_PREFIX)
