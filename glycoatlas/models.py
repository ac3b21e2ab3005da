"""Payload, derived-view and request models for the dashboard API."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glycoatlas.catalog import RnaCategory


class _Payload(BaseModel):
    """Base for records received from the data source; frozen once validated."""

    model_config = ConfigDict(frozen=True, extra="ignore")


# ── Expression search ──


class ExpressionRecord(_Payload):
    gene_id: str
    symbol: str
    category: str  # not trusted from the source; overwritten on search
    tumor_expression: float  # log2 CPM
    normal_expression: float  # log2 CPM
    fold_change: float
    p_value: float
    fdr: float
    evidence: str = ""
    localization: str = ""


# ── Survival ──


class VitalStatus(str, Enum):
    LIVING = "LIVING"
    DECEASED = "DECEASED"


_STATUS_SYNONYMS = {"ALIVE": "LIVING", "DEAD": "DECEASED"}


class SurvivalPoint(_Payload):
    time: float = Field(ge=0)
    survival_prob: float = Field(ge=0.0, le=1.0)
    group: str


class ClinicalSample(_Payload):
    sample_id: str
    expression_level: float
    group: str
    survival_months: float = Field(ge=0)
    status: VitalStatus

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            return _STATUS_SYNONYMS.get(v, v)
        return v


class SurvivalAnalysis(_Payload):
    p_val_log_rank: float
    hazard_ratio: float
    interpretation: str = ""
    data: list[SurvivalPoint] = []
    samples: list[ClinicalSample] = []


# ── Clinical / enrichment / immune / drugs ──


class ClinicalGroup(_Payload):
    name: str
    average_expression: float
    count: int


class ClinicalFeature(_Payload):
    feature_name: str
    groups: list[ClinicalGroup] = []
    p_value: float


class EnrichmentTerm(_Payload):
    id: str
    term: str
    category: Literal["GO_BP", "GO_CC", "GO_MF", "KEGG"]
    p_value: float
    count: int
    gene_ratio: float = Field(ge=0.0, le=1.0)


class ImmuneCell(_Payload):
    cell_type: str
    correlation: float = Field(ge=-1.0, le=1.0)  # Spearman rho
    p_value: float


class DrugSensitivity(_Payload):
    drug_name: str
    correlation: float  # vs IC50; negative means higher expression = more sensitive
    mechanism: str = ""
    p_value: float


class DetailedAnalysisResult(_Payload):
    gene_symbol: str
    tumor_type: str
    survival: SurvivalAnalysis
    clinical: list[ClinicalFeature] = []
    enrichment: list[EnrichmentTerm] = []
    immune: list[ImmuneCell] = []
    drugs: list[DrugSensitivity] = []


# ── Derived views ──


class AlignedSurvivalPoint(BaseModel):
    time: float
    high_probability: float | None = None
    low_probability: float | None = None


class GroupSurvivalSummary(BaseModel):
    group: Literal["high", "low"]
    n_samples: int
    n_events: int
    median_survival_months: float | None = None


class SampleSurvivalSummary(BaseModel):
    groups: list[GroupSurvivalSummary]
    p_value_log_rank: float | None = None
    warnings: list[str] = []


class SearchQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    tumor_code: str
    rna_category: RnaCategory


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: SearchQuery
    records: list[ExpressionRecord]


class ExportDocument(BaseModel):
    filename: str
    content: str
    media_type: str = "text/csv"


# ── API request models ──


class SearchRequest(BaseModel):
    tumor_code: str
    rna_category: str


class AnalyzeRequest(BaseModel):
    symbol: str


class SetModelRequest(BaseModel):
    model: str
