from typing import List

from pydantic import BaseModel, ConfigDict


class SummaryResult(BaseModel):
    """One summarized URL, as returned to the caller."""

    model_config = ConfigDict(frozen=True)

    url: str
    result: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    title: str


class SummarizeResponse(BaseModel):
    results: List[SummaryResult]


class ErrorDetail(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail


class UsageTotals(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
