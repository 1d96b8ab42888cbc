# --- konvert: Conversion API (FastAPI) ----------------------------------------
# Purpose: Minimal HTTP surface over the conversion core: list units and
# convert a value between two units along the shortest known path.
# Run: uvicorn api.main:app
# ------------------------------------------------------------------------------

from __future__ import annotations
from fastapi import FastAPI
from konvert.config import load_settings
from konvert.converter import Converter
from konvert.models import ConvertRequest, ConvertResponse
from konvert.table import ConversionTable

# Load .env / environment for the table path and search budget
_settings = load_settings()

def _load_table() -> ConversionTable:
    if _settings.table_path:
        return ConversionTable.from_file(_settings.table_path)
    return ConversionTable.builtin()

app = FastAPI(title="konvert API")

# Table + converter are built once at import; both are read-only afterwards.
_table = _load_table()
_converter = Converter.from_table(_table, max_expansions=_settings.max_expansions)

# ----------------------------- Routes -----------------------------------------
@app.get("/health")
def health(): return {"ok": True}

@app.get("/units")
def list_units():
    """Every unit named in the loaded table (sources and targets)."""
    units = _converter.units()
    return {"count": len(units), "items": units}

@app.get("/conversions")
def list_conversions():
    """Base table entries, without generated inverses."""
    items = _table.list_conversions()
    return {"count": len(items), "items": items}

@app.post("/convert", response_model=ConvertResponse)
def convert(req: ConvertRequest):
    """
    Convert req.value from req.source to req.target.
    Failures (unknown unit, no path) still return 200 with ok=false and a
    typed error_kind, so clients can render them without special-casing.
    """
    res = _converter.convert(req.value, req.source, req.target)
    return ConvertResponse(**res.to_dict())
