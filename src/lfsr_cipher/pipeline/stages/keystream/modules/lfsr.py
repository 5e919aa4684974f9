from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple
import logging

import numpy as np

from lfsr_cipher.errors import InvalidSeedCharacter, InvalidSeedLength, InvalidTaps

logger = logging.getLogger(__name__)

REGISTER_SIZE = 33
TAPS_33_13_12_10: Tuple[int, ...] = (33, 13, 12, 10)
TAPS_33_13: Tuple[int, ...] = (33, 13)
DEFAULT_SEED = "10" * 16 + "1"

# on_step(index, out_bit, feedback)
StepHook = Callable[[int, int, int], None]


@dataclass(frozen=True)
class Config:
    """
    Fibonacci LFSR keystream, MSB-first tap convention.

    Per step: emit register[0], feedback = XOR of register[t - 1] for t in taps,
    shift left by one, register[-1] = feedback.

    seed: '0'/'1' string (or sequence of 0/1) of exactly register_size bits.
    taps: 1-based register positions feeding the XOR.
    packed: False -> one 0/1-valued byte per step.
            True  -> 8 steps per byte, MSB first.

    NOT crypto. A 33-bit LFSR is recoverable from 66 known keystream bits.
    """
    seed: Any = DEFAULT_SEED
    taps: Tuple[int, ...] = TAPS_33_13_12_10
    register_size: int = REGISTER_SIZE
    packed: bool = False


class Keystream:
    """
    One register, initialized from cfg.seed. Successive take() calls continue
    the same sequence, so chunked reads match a single generate() call.
    """

    def __init__(self, cfg: Any, *, on_step: Optional[StepHook] = None):
        size = _get_register_size(cfg)
        self._register = parse_seed(getattr(cfg, "seed", None), size)
        self._taps = [t - 1 for t in _get_taps(cfg, size)]
        self._packed = bool(getattr(cfg, "packed", False))
        self._on_step = on_step
        self._index = 0

        if not any(self._register):
            logger.warning("all-zero seed: keystream is constant zero")

    @property
    def steps(self) -> int:
        return self._index

    def step(self) -> int:
        reg = self._register
        out = reg[0]
        fb = 0
        for t in self._taps:
            fb ^= reg[t]
        del reg[0]
        reg.append(fb)

        if self._on_step is not None:
            self._on_step(self._index, out, fb)
        self._index += 1
        return out

    def take(self, n: int) -> bytes:
        if not isinstance(n, int) or isinstance(n, bool):
            raise TypeError("n must be int")
        if n < 0:
            raise ValueError("n must be >= 0")
        if n == 0:
            return b""

        if not self._packed:
            return bytes(self.step() for _ in range(n))

        bits = np.fromiter((self.step() for _ in range(n * 8)), dtype=np.uint8, count=n * 8)
        return np.packbits(bits).tobytes()


def generate(length: int, *, cfg: Any, on_step: Optional[StepHook] = None) -> bytes:
    """
    Keystream of `length` bytes, always starting from cfg.seed.
    Uniform module API: generate(int, *, cfg) -> bytes
    """
    return Keystream(cfg, on_step=on_step).take(length)


def open_stream(*, cfg: Any, on_step: Optional[StepHook] = None) -> Keystream:
    return Keystream(cfg, on_step=on_step)


def parse_seed(seed: Any, register_size: int) -> List[int]:
    """
    Seed -> register bits, in input order.

    Characters are checked before length: "10x" fails as a bad character,
    "10" fails as a bad length.
    """
    if seed is None:
        raise AttributeError("cfg missing required attribute: seed")

    if isinstance(seed, str):
        bits = []
        for i, ch in enumerate(seed):
            if ch not in "01":
                raise InvalidSeedCharacter(
                    f"seed character {ch!r} at position {i} is not '0' or '1'"
                )
            bits.append(1 if ch == "1" else 0)
    elif isinstance(seed, (list, tuple)):
        bits = []
        for i, v in enumerate(seed):
            if v not in (0, 1) or not isinstance(v, (int, np.integer)):
                raise InvalidSeedCharacter(f"seed bit {v!r} at position {i} is not 0 or 1")
            bits.append(int(v))
    else:
        raise TypeError("cfg.seed must be str or a sequence of 0/1")

    if len(bits) != register_size:
        raise InvalidSeedLength(
            f"seed has {len(bits)} bits, register size is {register_size}"
        )
    return bits


# ----------------------------
# Internal
# ----------------------------

def _get_register_size(cfg: Any) -> int:
    size = getattr(cfg, "register_size", None)
    if size is None:
        raise AttributeError("cfg missing required int attribute: register_size")
    if not isinstance(size, int) or isinstance(size, bool):
        raise TypeError("cfg.register_size must be int")
    if size <= 0:
        raise ValueError("cfg.register_size must be positive")
    return size


def _get_taps(cfg: Any, register_size: int) -> Sequence[int]:
    taps = getattr(cfg, "taps", None)
    if taps is None:
        raise AttributeError("cfg missing required attribute: taps")
    taps = tuple(taps)
    if not taps:
        raise InvalidTaps("taps must not be empty")
    for t in taps:
        if not isinstance(t, int) or isinstance(t, bool):
            raise InvalidTaps(f"tap {t!r} is not an int")
        if not (1 <= t <= register_size):
            raise InvalidTaps(f"tap {t} outside 1..{register_size}")
    if len(set(taps)) != len(taps):
        raise InvalidTaps(f"duplicate taps in {taps}")
    return taps
