from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
import logging
import os
import re
import stat
import tempfile

from lfsr_cipher.pipeline.config import PipelineConfig
from lfsr_cipher.pipeline.pipeline import Pipeline, Result
from lfsr_cipher.pipeline.stages.keystream.modules.lfsr import REGISTER_SIZE

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1 << 20  # 1 MiB

_NOT_BINARY = re.compile(r"[^01]")


def sanitize_seed(text: str, register_size: int = REGISTER_SIZE) -> str:
    """
    Keep only '0'/'1' characters, truncated to register_size.
    The result may still be short; the generator rejects that.
    """
    if not isinstance(text, str):
        raise TypeError("seed text must be str")
    return _NOT_BINARY.sub("", text)[:register_size]


def output_path_for(src: str | Path, *, encrypt: bool) -> Path:
    """
    data/report.pdf -> data/encrypted_report.pdf (or decrypted_report.pdf)
    """
    src = Path(src)
    prefix = "encrypted" if encrypt else "decrypted"
    return src.with_name(f"{prefix}_{src.name}")


def process_file(
    src: str | Path,
    *,
    cfg: PipelineConfig,
    encrypt: bool,
    out_path: str | Path | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_step: Optional[Callable[[int, int, int], None]] = None,
) -> Path:
    """
    Encrypt/decrypt src into out_path (default: output_path_for(src)).

    Output is written to a temp file beside the destination and renamed into
    place, so a failed run never leaves a partial file.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    src = Path(src)
    dst = Path(out_path) if out_path is not None else output_path_for(src, encrypt=encrypt)
    if dst.resolve() == src.resolve():
        raise ValueError(f"output path {dst} is the input file")

    pipeline = Pipeline(cfg, on_step=on_step)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{dst.name}.", suffix=".tmp", dir=dst.parent)
    written = 0
    try:
        with os.fdopen(fd, "wb") as fout, open(src, "rb") as fin:
            chunks = iter(lambda: fin.read(chunk_size), b"")
            for out in pipeline.iter_process(chunks):
                fout.write(out)
                written += len(out)
        os.chmod(tmp_name, _output_mode(dst))
        os.replace(tmp_name, dst)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("%s %s -> %s (%d bytes)", "encrypted" if encrypt else "decrypted", src, dst, written)
    return dst


def preview(src: str | Path, *, cfg: PipelineConfig, n_bytes: int) -> Result:
    """
    Key, input and output for the first n_bytes of src.
    """
    if n_bytes < 0:
        raise ValueError("n_bytes must be >= 0")
    with open(src, "rb") as f:
        head = f.read(n_bytes)
    return Pipeline(cfg).process(head)


def _output_mode(dst: Path) -> int:
    """
    Keep an existing destination's mode, else what open(dst, "wb") would give.
    mkstemp always creates 0600.
    """
    try:
        return stat.S_IMODE(os.stat(dst).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
