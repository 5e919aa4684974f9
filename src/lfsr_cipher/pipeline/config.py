from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from lfsr_cipher.pipeline.stages.keystream.stage import Config as KeystreamStageConfig
from lfsr_cipher.pipeline.stages.keystream.modules.lfsr import (
    Config as LfsrConfig,
    REGISTER_SIZE,
    TAPS_33_13_12_10,
)
from lfsr_cipher.pipeline.stages.cipher.stage import Config as CipherStageConfig
from lfsr_cipher.pipeline.stages.cipher.modules.xor import Config as XorConfig


@dataclass(frozen=True)
class PipelineConfig:
    """
    Stream cipher configuration.

    Both directions run the same composition:
      keystream(len(data)) -> cipher(data, keystream)
    """
    keystream: KeystreamStageConfig
    cipher: CipherStageConfig = field(default_factory=CipherStageConfig)


def make_pipeline_config(
    seed: Any,
    *,
    taps: Sequence[int] = TAPS_33_13_12_10,
    register_size: int = REGISTER_SIZE,
    packed: bool = False,
    strict: bool = True,
) -> PipelineConfig:
    return PipelineConfig(
        keystream=KeystreamStageConfig(
            module="lfsr",
            module_cfg=LfsrConfig(
                seed=seed,
                taps=tuple(taps),
                register_size=register_size,
                packed=packed,
            ),
        ),
        cipher=CipherStageConfig(module="xor", module_cfg=XorConfig(strict=strict)),
    )
