from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional
import importlib
import pkgutil


@dataclass(frozen=True)
class Config:
    """
    Keystream stage config.

    module: generator module name (e.g. "lfsr")
    module_cfg: instance of that module's Config (or None -> defaults)
    """
    module: str = "lfsr"
    module_cfg: Any = None


def available_modules() -> list[str]:
    """
    Enumerate available generator modules under pipeline/stages/keystream/modules.
    """
    pkg = importlib.import_module(f"{__package__}.modules")
    names = [m.name for m in pkgutil.iter_modules(pkg.__path__)]
    return sorted([n for n in names if not n.startswith("_")])


def _import_keystream_module(name: str):
    if not isinstance(name, str) or not name:
        raise ValueError("cfg.module must be a non-empty string")
    return importlib.import_module(f"{__package__}.modules.{name}")


def _resolve_module_and_cfg(cfg: Config):
    mod = _import_keystream_module(cfg.module)

    if not hasattr(mod, "Config"):
        raise AttributeError(f"keystream module '{cfg.module}' missing Config")
    if not hasattr(mod, "generate") or not hasattr(mod, "open_stream"):
        raise AttributeError(f"keystream module '{cfg.module}' missing generate/open_stream")

    module_cfg = cfg.module_cfg if cfg.module_cfg is not None else mod.Config()
    return mod, module_cfg


def generate(length: int, *, cfg: Config, on_step: Optional[Callable] = None) -> bytes:
    """
    Stage generate: `length` keystream bytes from the configured generator.
    """
    mod, module_cfg = _resolve_module_and_cfg(cfg)
    return mod.generate(length, cfg=module_cfg, on_step=on_step)


def stream(*, cfg: Config, on_step: Optional[Callable] = None):
    """
    Stage stream: a stateful keystream with take(n), for chunked processing.
    """
    mod, module_cfg = _resolve_module_and_cfg(cfg)
    return mod.open_stream(cfg=module_cfg, on_step=on_step)
