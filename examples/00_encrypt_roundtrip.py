from pathlib import Path

from lfsr_cipher.host.files import process_file
from lfsr_cipher.pipeline.config import make_pipeline_config
from lfsr_cipher.pipeline.stages.keystream.modules.lfsr import TAPS_33_13


if __name__ == "__main__":
    src = Path("tests/sample_assets/hello.txt")
    out_dir = Path("tests/outputs")
    out_dir.mkdir(parents=True, exist_ok=True)

    cfg = make_pipeline_config("101010101010101010101010101010101", taps=TAPS_33_13)

    enc = process_file(src, cfg=cfg, encrypt=True, out_path=out_dir / f"encrypted_{src.name}")
    dec = process_file(enc, cfg=cfg, encrypt=False, out_path=out_dir / f"decrypted_{src.name}")

    assert dec.read_bytes() == src.read_bytes()
    print(f"Wrote {enc} and {dec}")
