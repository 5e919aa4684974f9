import pytest

from lfsr_cipher.errors import KeyLengthMismatch
from lfsr_cipher.pipeline.stages.cipher.modules.xor import Config, rx, transform, tx


def test_known_vector():
    data = bytes([0xFF, 0x00, 0xAB])
    key = bytes([0x0F, 0xF0, 0x00])
    assert transform(data, key, cfg=Config()) == bytes([0xF0, 0xF0, 0xAB])


def test_symmetric():
    cfg = Config()
    payload = b"\x00\x01\x02hello\xff\x10\x20"
    key = bytes((i * 37 + 11) & 0xFF for i in range(len(payload)))
    c = tx(payload, key, cfg=cfg)
    assert c != payload
    assert rx(c, key, cfg=cfg) == payload


def test_empty():
    assert transform(b"", b"", cfg=Config()) == b""
    assert transform(b"", b"\x01\x02", cfg=Config(strict=False)) == b""


def test_does_not_mutate_input():
    data = bytearray(b"abc")
    transform(data, b"\x01\x01\x01", cfg=Config())
    assert data == bytearray(b"abc")


@pytest.mark.parametrize("key", [b"\x01", b"\x01\x02\x03\x04"])
def test_strict_rejects_length_mismatch(key):
    with pytest.raises(KeyLengthMismatch):
        transform(b"abc", key, cfg=Config(strict=True))


def test_lenient_short_key_passes_tail_through():
    out = transform(b"\x10\x20\x30\x40", b"\x01\x01", cfg=Config(strict=False))
    assert out == b"\x11\x21\x30\x40"


def test_lenient_long_key_is_truncated():
    out = transform(b"\x10\x20", b"\x01\x02\x03", cfg=Config(strict=False))
    assert out == b"\x11\x22"


def test_type_checks():
    with pytest.raises(TypeError):
        transform("abc", b"abc", cfg=Config())
    with pytest.raises(TypeError):
        transform(b"abc", [1, 2, 3], cfg=Config())


def test_strict_must_be_bool():
    with pytest.raises(TypeError):
        transform(b"a", b"a", cfg=Config(strict="yes"))
