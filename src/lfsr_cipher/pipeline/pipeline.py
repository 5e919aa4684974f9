from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional

from lfsr_cipher.pipeline.config import PipelineConfig

from lfsr_cipher.pipeline.stages.keystream import stage as keystream_stage
from lfsr_cipher.pipeline.stages.cipher import stage as cipher_stage


@dataclass(frozen=True)
class Result:
    key: bytes
    data: bytes
    output: bytes


@dataclass
class Pipeline:
    """
    keystream -> XOR. Encrypt and decrypt are the same operation; tx/rx are
    kept separate so callers read naturally.
    """
    cfg: PipelineConfig
    on_step: Optional[Callable[[int, int, int], None]] = None

    def keystream(self, length: int) -> bytes:
        return keystream_stage.generate(length, cfg=self.cfg.keystream, on_step=self.on_step)

    def process(self, data: bytes) -> Result:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("process: data must be bytes-like")
        data = bytes(data)
        key = self.keystream(len(data))
        out = cipher_stage.tx(data, key, cfg=self.cfg.cipher)
        return Result(key=key, data=data, output=out)

    def tx(self, data: bytes) -> bytes:
        return self.process(data).output

    def rx(self, data: bytes) -> bytes:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("rx: data must be bytes-like")
        data = bytes(data)
        key = self.keystream(len(data))
        return cipher_stage.rx(data, key, cfg=self.cfg.cipher)

    def iter_process(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """
        Chunked transform over one continuous keystream.
        Concatenated output equals process(b"".join(chunks)).output.
        """
        ks = keystream_stage.stream(cfg=self.cfg.keystream, on_step=self.on_step)
        for chunk in chunks:
            if not isinstance(chunk, (bytes, bytearray)):
                raise TypeError("iter_process: chunks must be bytes-like")
            key = ks.take(len(chunk))
            yield cipher_stage.tx(bytes(chunk), key, cfg=self.cfg.cipher)
