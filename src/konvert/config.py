# -----------------------------------------------------------------------------
# Runtime configuration
# Environment variables (optionally from a .env file in the working directory):
#   KONVERT_TABLE           path to a YAML conversion table (default: built-in)
#   KONVERT_MAX_EXPANSIONS  path-search budget (default: unbounded)
#   TRACE_DIR               where --trace writes JSON runs (default: traces)
# -----------------------------------------------------------------------------

from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv

class ConfigError(Exception): pass

@dataclass
class Settings:
    table_path: str | None = None
    max_expansions: int | None = None
    trace_dir: str = "traces"

def _int_or_none(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        n = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if n <= 0:
        raise ConfigError(f"{name} must be positive, got {n}")
    return n

def load_settings(use_dotenv: bool = True) -> Settings:
    # .env never overrides variables already set in the environment
    if use_dotenv:
        load_dotenv()
    return Settings(
        table_path=os.getenv("KONVERT_TABLE") or None,
        max_expansions=_int_or_none("KONVERT_MAX_EXPANSIONS"),
        trace_dir=os.getenv("TRACE_DIR", "traces"),
    )
