"""
identifier.py - Deterministic identifier generation.

Identifiers are a 64-bit FNV-1 hash of the supplied tokens (separated by the
byte 0x31) rendered as unpadded base32, so the same tokens always yield the
same identifier in every process.

Module: family_graph.identifier
"""
from __future__ import annotations

import base64

__all__ = ['new_id']

_FNV64_OFFSET_BASIS = 0xcbf29ce484222325
_FNV64_PRIME = 0x100000001b3
_MASK64 = 0xffffffffffffffff
_SEPARATOR = b'\x31'


def _fnv1_64(data: bytes, h: int = _FNV64_OFFSET_BASIS) -> int:
    for byte in data:
        h = (h * _FNV64_PRIME) & _MASK64
        h ^= byte
    return h


def new_id(*tokens: str) -> str:
    """
    Build a stable identifier from one or more string tokens.

    Args:
        *tokens: Strings that together identify the entity.

    Returns:
        str: Unpadded base32 identifier (13 characters).
    """
    h = _FNV64_OFFSET_BASIS
    for i, token in enumerate(tokens):
        if i > 0:
            h = _fnv1_64(_SEPARATOR, h)
        h = _fnv1_64(token.encode('utf-8'), h)
    return base64.b32encode(h.to_bytes(8, 'big')).decode('ascii').rstrip('=')
