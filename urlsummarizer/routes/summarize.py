from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..errors import (
    GENERIC_ERROR_MESSAGE,
    ConfigurationError,
    ModelError,
    SummarizerError,
    ValidationError,
)
from ..logging import logger
from ..schemas import ErrorResponse, SummarizeResponse
from ..services.summarizer import summarize_all

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"message": message}})


async def summarizer_error_handler(request: Request, exc: SummarizerError) -> JSONResponse:
    """Translate pipeline errors into the public error shapes.

    Only model errors with an upstream response leak detail, and then only
    what the upstream itself sent.
    """
    if isinstance(exc, ConfigurationError):
        logger.error("request.not_configured", path=request.url.path)
        return _error(500, str(exc))
    if isinstance(exc, ValidationError):
        return _error(400, str(exc))
    if isinstance(exc, ModelError) and exc.has_upstream_response:
        return JSONResponse(status_code=exc.status_code, content=exc.body)

    logger.error(
        "request.failed",
        path=request.url.path,
        error_type=exc.__class__.__name__,
        error=str(exc),
    )
    return _error(500, GENERIC_ERROR_MESSAGE)


async def _read_payload(request: Request) -> Dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post(
    "/api/generate",
    response_model=SummarizeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate(request: Request):
    state = request.app.state
    # credential first: nothing else is looked at without it
    if state.completions is None or not state.config.openai_api_key:
        raise ConfigurationError()

    payload = await _read_payload(request)
    cfg = state.config
    try:
        results = await summarize_all(
            payload.get("urls"),
            completions=state.completions,
            fetch=state.fetcher,
            model=cfg.model,
            temperature=cfg.temperature,
            token_budget=cfg.token_budget,
            max_concurrency=cfg.max_concurrency,
        )
    except SummarizerError:
        raise
    except Exception as e:
        logger.error("generate.unexpected_error", error_type=e.__class__.__name__, error=str(e))
        raise SummarizerError(str(e)) from e

    return SummarizeResponse(results=results)
