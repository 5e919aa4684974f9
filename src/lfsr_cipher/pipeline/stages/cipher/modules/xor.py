from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import logging

import numpy as np

from lfsr_cipher.errors import KeyLengthMismatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """
    Byte-wise XOR of data with a keystream. Symmetric:
      rx(tx(x, key), key) == x   when len(key) >= len(x)

    strict: True  -> len(key) != len(data) raises KeyLengthMismatch.
            False -> XOR the first min(len(data), len(key)) bytes and pass the
                     rest of data through unchanged (legacy behaviour).
    """
    strict: bool = True


def tx(data: bytes, key: bytes, *, cfg: Any) -> bytes:
    """
    TX direction: encrypt.
    Uniform module API: tx(bytes, bytes, *, cfg) -> bytes
    """
    return transform(data, key, cfg=cfg)


def rx(data: bytes, key: bytes, *, cfg: Any) -> bytes:
    """
    RX direction: decrypt. Identical to tx().
    """
    return transform(data, key, cfg=cfg)


def transform(data: bytes, key: bytes, *, cfg: Any) -> bytes:
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("data must be bytes-like")
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError("key must be bytes-like")

    strict = _get_strict(cfg)
    if len(key) != len(data):
        if strict:
            raise KeyLengthMismatch(
                f"key has {len(key)} bytes, data has {len(data)} bytes"
            )
        if len(key) < len(data):
            logger.debug("key shorter than data: last %d bytes pass through", len(data) - len(key))

    n = min(len(data), len(key))
    if n == 0:
        return bytes(data)

    d = np.frombuffer(bytes(data), dtype=np.uint8)
    k = np.frombuffer(bytes(key), dtype=np.uint8, count=n)
    out = d.copy()
    np.bitwise_xor(d[:n], k, out=out[:n])
    return out.tobytes()


# ----------------------------
# Internal
# ----------------------------

def _get_strict(cfg: Any) -> bool:
    strict = getattr(cfg, "strict", None)
    if strict is None:
        raise AttributeError("cfg missing required bool attribute: strict")
    if not isinstance(strict, bool):
        raise TypeError("cfg.strict must be bool")
    return strict
