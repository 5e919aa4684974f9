"""
lfsr-cipher: XOR a file with an LFSR keystream.

Usage:
  lfsr-cipher encrypt FILE -s SEED [-t TAPS] [-r SIZE] [-o OUT] [--packed] [--show N] [--trace]
  lfsr-cipher decrypt FILE -s SEED [same options]
  lfsr-cipher keystream -s SEED -n N [-t TAPS] [-r SIZE] [--packed]

Not cryptographically secure - for learning.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from lfsr_cipher.host.files import preview, process_file, sanitize_seed
from lfsr_cipher.pipeline.config import make_pipeline_config
from lfsr_cipher.pipeline.pipeline import Pipeline
from lfsr_cipher.pipeline.stages.keystream.modules.lfsr import REGISTER_SIZE, TAPS_33_13_12_10
from lfsr_cipher.utils.bitops import bytes_to_bit_string, format_bit_string

logger = logging.getLogger("lfsr_cipher")


def parse_taps(s: str) -> List[int]:
    """
    "33,13" / "33 13" / "[33, 13]" -> [33, 13]
    """
    raw = s.strip()
    if raw.startswith("[") and raw.endswith("]"):
        raw = raw[1:-1]
    parts = [p for p in raw.replace(",", " ").split() if p]
    try:
        taps = [int(p, 10) for p in parts]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid taps {s!r}: {e}") from e
    if not taps:
        raise argparse.ArgumentTypeError("taps must not be empty")
    return taps


def _add_lfsr_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-s", "--seed", required=True,
                   help=f"Register seed, a string of 0/1 (default size {REGISTER_SIZE}); other characters are dropped")
    p.add_argument("-t", "--taps", type=parse_taps, default=list(TAPS_33_13_12_10),
                   help=f"1-based tap positions (default {','.join(map(str, TAPS_33_13_12_10))})")
    p.add_argument("-r", "--register-size", type=int, default=REGISTER_SIZE,
                   help=f"LFSR length in bits (default {REGISTER_SIZE})")
    p.add_argument("--packed", action="store_true",
                   help="Pack 8 LFSR steps per keystream byte instead of one 0/1 byte per step")


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="lfsr-cipher", description="LFSR stream cipher (encrypt/decrypt/keystream).")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    for name, verb in (("encrypt", "Encrypt"), ("decrypt", "Decrypt")):
        c = sub.add_parser(name, help=f"{verb} a file with the LFSR XOR keystream.")
        c.add_argument("file", help="Input file")
        _add_lfsr_args(c)
        c.add_argument("-o", "--output", default=None,
                       help=f"Output file (default: {name}ed_<name> beside the input)")
        c.add_argument("--show", type=int, default=0, metavar="N",
                       help="Print key, input and output bits for the first N bytes")
        c.add_argument("--trace", action="store_true",
                       help="Log every LFSR step (implies --verbose)")

    ks = sub.add_parser("keystream", help="Print keystream bits.")
    _add_lfsr_args(ks)
    ks.add_argument("-n", "--length", type=int, required=True, help="Number of keystream bytes")
    return p


def _seed_from_args(args) -> str:
    seed = sanitize_seed(args.seed, args.register_size)
    if seed != args.seed:
        logger.warning("seed filtered to %d bits: %s", len(seed), seed)
    return seed


def _trace_step(index: int, out_bit: int, feedback: int) -> None:
    logger.debug("step %d: out=%d feedback=%d", index, out_bit, feedback)


def _print_bits(title: str, data: bytes) -> None:
    print(f"{title}:")
    print(format_bit_string(bytes_to_bit_string(data)))


def _run_file(args) -> None:
    cfg = make_pipeline_config(
        _seed_from_args(args),
        taps=args.taps,
        register_size=args.register_size,
        packed=args.packed,
    )
    encrypt = args.cmd == "encrypt"
    out = process_file(
        args.file,
        cfg=cfg,
        encrypt=encrypt,
        out_path=args.output,
        on_step=_trace_step if args.trace else None,
    )
    print(f"File {'encrypted' if encrypt else 'decrypted'} -> {out}")

    if args.show > 0:
        r = preview(args.file, cfg=cfg, n_bytes=args.show)
        _print_bits("Key", r.key)
        _print_bits("Input", r.data)
        _print_bits("Output", r.output)


def _run_keystream(args) -> None:
    cfg = make_pipeline_config(
        _seed_from_args(args),
        taps=args.taps,
        register_size=args.register_size,
        packed=args.packed,
    )
    key = Pipeline(cfg).keystream(args.length)
    if args.packed:
        bits = bytes_to_bit_string(key)
    else:
        bits = "".join(str(b) for b in key)
    print(format_bit_string(bits))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)

    verbose = args.verbose or getattr(args, "trace", False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s: %(message)s",
    )

    try:
        if args.cmd in ("encrypt", "decrypt"):
            _run_file(args)
        elif args.cmd == "keystream":
            _run_keystream(args)
    except (ValueError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
