from __future__ import annotations
from pydantic import BaseModel

class HealthResult(BaseModel):
    status: str
    version: str
    time: str

class ReadyResult(BaseModel):
    ready: bool
