from __future__ import annotations

import numpy as np


def bytes_to_bit_string(data: bytes) -> str:
    """
    b"\\x05\\xa0" -> "0000010110100000"

    8 characters per byte, MSB first, no separators.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("data must be bytes-like")
    if not data:
        return ""
    arr = np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))
    return "".join("1" if b else "0" for b in arr)


def bit_string_to_bytes(bits: str) -> bytes:
    """
    Inverse of bytes_to_bit_string.

    A trailing group shorter than 8 characters is zero-filled in its low
    order bits ("101" -> b"\\xa0").
    """
    if not isinstance(bits, str):
        raise TypeError("bits must be str")
    if not bits:
        return b""
    bad = set(bits) - {"0", "1"}
    if bad:
        raise ValueError(f"bit string may only contain '0' and '1', got {sorted(bad)!r}")
    arr = np.fromiter((ch == "1" for ch in bits), dtype=np.uint8, count=len(bits))
    # packbits pads the final partial byte with zeros on the right
    return np.packbits(arr).tobytes()


def format_bit_string(bits: str, *, group: int = 8, groups_per_line: int = 8) -> str:
    """
    Display-only layout: space-separated groups, newline every groups_per_line.
    """
    if group <= 0 or groups_per_line <= 0:
        raise ValueError("group and groups_per_line must be positive")
    tokens = [bits[i:i + group] for i in range(0, len(bits), group)]
    lines = [
        " ".join(tokens[i:i + groups_per_line])
        for i in range(0, len(tokens), groups_per_line)
    ]
    return "\n".join(lines)
