"""
Pydantic schemas for the Classi scoring API.
"""
from pydantic import BaseModel


# ============================================================
# SCORING SCHEMAS
# ============================================================

class DiffUnitSchema(BaseModel):
    classis: list[str]
    field: str
    field_exist: bool


class CategoryAccuracySchema(BaseModel):
    category: str
    total: int
    matched: int
    accuracy: float


class AccuracyReportSchema(BaseModel):
    total: int
    matched: int
    overall_accuracy: float
    categories: list[CategoryAccuracySchema]


class ScoreResponse(BaseModel):
    """Result of scoring one candidate workbook."""
    filename: str
    accuracy: AccuracyReportSchema
    diff: list[DiffUnitSchema]
    report: list[str]


# ============================================================
# SYSTEM SCHEMAS
# ============================================================

class HealthResponse(BaseModel):
    status: str
    app: str
    version: str
    reference_loaded: bool
    reference_fields: int = 0
