from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal, Optional

Category = Literal['SKIN', 'HAIR']
Grade = Literal['A+', 'A', 'B', 'C', 'D', 'F']


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class CatalogEntry(FrozenModel):
    name: str
    url: str
    category: Category


class Metrics(FrozenModel):
    byte_size: int = Field(ge=0)
    request_count: int = Field(ge=0)
    load_time_ms: int = Field(ge=0)
    is_green_hosting: bool


class ModelEstimate(FrozenModel):
    model_name: str
    grams: float = Field(ge=0)
    grade: Grade


class AnalysisResult(FrozenModel):
    subject_url: str
    metrics: Metrics
    estimates: Dict[str, ModelEstimate]


class RankedEntry(FrozenModel):
    entry: CatalogEntry
    result: AnalysisResult
    position: int = Field(ge=1)


# HTTP request/response bodies

class AnalyzeRequest(BaseModel):
    url: str


class EstimateView(BaseModel):
    model: str
    label: str
    grams: float
    formatted: str
    grade: Grade
    grade_color: str


class AnalysisView(BaseModel):
    url: str
    page_size: str
    total_bytes: int
    requests: int
    load_time_ms: int
    is_green_hosting: bool
    estimates: List[EstimateView]


class RankingRow(BaseModel):
    position: int
    name: str
    url: str
    category: Category
    grams: float
    emissions: str
    grade: Grade
    page_size: str
    is_green_hosting: bool
    color: str


class RankingsResponse(BaseModel):
    state: str
    model: str
    rankings: List[RankingRow]


class RefreshResponse(BaseModel):
    state: str
    analyzed: int
    catalog_size: int


class EcoTipRequest(BaseModel):
    prompt: Optional[str] = None
    model: str = 'oneByte'


class EcoTipResponse(BaseModel):
    response: str
