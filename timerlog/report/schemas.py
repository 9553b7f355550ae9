"""Pydantic models for timer reports."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class TimerStats(BaseModel):
    name: str
    count: int
    total_ns: int
    mean_ns: float
    min_ns: int
    max_ns: int
    std_ns: float


class DiagnosticModel(BaseModel):
    name: str
    issue: str
    message: str
    index: Optional[int] = None


class TimerReport(BaseModel):
    sources: List[str] = []
    timers: List[TimerStats]
    diagnostics: List[DiagnosticModel] = []


__all__ = ["TimerStats", "DiagnosticModel", "TimerReport"]
