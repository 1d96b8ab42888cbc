# -----------------------------------------------------------------------------
# Tracing utility
# Purpose:
#   Lightweight, append-only trace collector recording structured steps
#   (inputs, path search, evaluation, result) during a conversion, plus a
#   helper that writes a finished trace to TRACE_DIR as JSON.
# -----------------------------------------------------------------------------

from __future__ import annotations
import json
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, List

@dataclass
class TraceStep:
    # One trace record with a short 'kind' label and free-form structured detail.
    kind: str
    detail: Dict[str, Any]

class Tracer:
    def __init__(self): self._steps: List[TraceStep] = []
    def add(self, kind: str, detail: Dict[str, Any]): self._steps.append(TraceStep(kind, detail))
    def steps(self) -> List[Dict[str, Any]]:
        # Export in plain dict form for easy JSON serialization.
        return [{"kind": s.kind, "detail": s.detail} for s in self._steps]

def ts() -> str:
    return time.strftime("%Y%m%d_%H%M%SZ", time.gmtime())

def save_trace(meta: Dict[str, Any], trace: List[Dict[str, Any]], trace_dir: str) -> str:
    """Write {meta, trace} to <trace_dir>/run_<timestamp>.json and return the path."""
    os.makedirs(trace_dir, exist_ok=True)
    data = {"meta": meta, "trace": trace}
    fpath = os.path.join(trace_dir, f"run_{ts()}.json")
    with open(fpath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return fpath
