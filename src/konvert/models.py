from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, model_validator

class TableEntry(BaseModel):
    # One row of a conversion table: exactly one of rate / forward.
    source: str
    target: str
    rate: Optional[float] = None
    forward: Optional[str] = None
    reverse: Optional[str] = None

    @model_validator(mode="after")
    def _one_calculation(self) -> "TableEntry":
        if (self.rate is None) == (self.forward is None):
            raise ValueError("entry needs exactly one of 'rate' or 'forward'")
        if self.rate is not None and self.rate == 0:
            raise ValueError("rate must be non-zero")
        if self.reverse is not None and self.forward is None:
            raise ValueError("'reverse' is only valid together with 'forward'")
        return self

class TableDoc(BaseModel):
    conversions: List[TableEntry] = Field(default_factory=list)

class ConvertRequest(BaseModel):
    value: float
    source: str
    target: str

class PathStep(BaseModel):
    source: str
    target: str
    calculation: str

class ConvertResponse(BaseModel):
    ok: bool
    value: Optional[float] = None
    source: str
    target: str
    path: List[PathStep] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    trace: List[Dict[str, Any]] = Field(default_factory=list)
    check: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
