import random

import pytest

from lfsr_cipher.errors import InvalidSeedLength
from lfsr_cipher.pipeline.config import PipelineConfig, make_pipeline_config
from lfsr_cipher.pipeline.pipeline import Pipeline
from lfsr_cipher.pipeline.stages.cipher.modules.xor import transform, Config as XorConfig
from lfsr_cipher.pipeline.stages.keystream.modules.lfsr import TAPS_33_13, TAPS_33_13_12_10, generate
from lfsr_cipher.pipeline.stages.keystream.stage import Config as KeystreamStageConfig

SEED = "101010101010101010101010101010101"


def _payload(n: int, seed: int = 1234) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(n))


@pytest.mark.parametrize("taps", [TAPS_33_13, TAPS_33_13_12_10])
@pytest.mark.parametrize("n", [0, 1, 33, 1000])
def test_encrypt_then_decrypt_restores_data(taps, n):
    p = Pipeline(make_pipeline_config(SEED, taps=taps))
    data = _payload(n)
    assert p.rx(p.tx(data)) == data


def test_matches_module_level_composition():
    cfg = make_pipeline_config(SEED, taps=TAPS_33_13)
    data = _payload(200)
    key = generate(len(data), cfg=cfg.keystream.module_cfg)
    expected = transform(data, key, cfg=XorConfig())
    assert Pipeline(cfg).tx(data) == expected
    assert transform(transform(data, key, cfg=XorConfig()), key, cfg=XorConfig()) == data


def test_default_keystream_only_flips_low_bit():
    r = Pipeline(make_pipeline_config(SEED)).process(_payload(64))
    assert set(r.key) <= {0, 1}
    assert all((a ^ b) & 0xFE == 0 for a, b in zip(r.data, r.output))


def test_packed_roundtrip_changes_high_bits():
    p = Pipeline(make_pipeline_config(SEED, packed=True))
    data = bytes(64)
    c = p.tx(data)
    assert any(b & 0xFE for b in c)
    assert p.rx(c) == data


def test_process_result_fields():
    p = Pipeline(make_pipeline_config(SEED))
    r = p.process(b"hello")
    assert r.data == b"hello"
    assert len(r.key) == 5
    assert r.output == p.tx(b"hello")


@pytest.mark.parametrize("chunk_size", [1, 7, 33, 64, 5000])
def test_chunked_equals_one_shot(chunk_size):
    p = Pipeline(make_pipeline_config(SEED, taps=TAPS_33_13))
    data = _payload(1000, seed=99)
    chunks = [data[i:i + chunk_size] for i in range(0, len(data), chunk_size)]
    assert b"".join(p.iter_process(chunks)) == p.tx(data)


def test_each_call_restarts_from_seed():
    p = Pipeline(make_pipeline_config(SEED))
    assert p.tx(b"abcdef") == p.tx(b"abcdef")


def test_bad_seed_propagates():
    p = Pipeline(make_pipeline_config(SEED[:-1]))
    with pytest.raises(InvalidSeedLength):
        p.tx(b"abc")


def test_pipeline_config_default_cipher():
    cfg = PipelineConfig(keystream=KeystreamStageConfig())
    assert cfg.cipher.module == "xor"
    data = _payload(50)
    p = Pipeline(cfg)
    assert p.rx(p.tx(data)) == data


def test_step_hook_is_forwarded():
    steps = []
    p = Pipeline(make_pipeline_config(SEED), on_step=lambda i, b, fb: steps.append(i))
    p.tx(b"\x00" * 12)
    assert steps == list(range(12))


@pytest.mark.parametrize("bad", [5, "text", [1, 2, 3]])
def test_rejects_non_bytes_both_directions(bad):
    p = Pipeline(make_pipeline_config(SEED))
    with pytest.raises(TypeError):
        p.tx(bad)
    with pytest.raises(TypeError):
        p.rx(bad)
