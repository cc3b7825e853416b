import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .config import Config, SetupError, load_config, validate_config
from .errors import SummarizerError
from .fetcher import PageFetcher
from .logging import logger
from .model_client import CompletionClient
from .resolver import Fetch
from .routes import health, summarize


def _mask_url(url: Optional[str]) -> Optional[str]:
    """Hide credentials in a URL before it is logged."""
    if not url or "@" not in url or "//" not in url:
        return url
    scheme, rest = url.split("//", 1)
    if "@" not in rest:
        return url
    auth, host = rest.split("@", 1)
    user = auth.split(":", 1)[0] if ":" in auth else ""
    masked = f"{user}:***" if user else "***"
    return f"{scheme}//{masked}@{host}"


def setup_and_validate(cfg: Config) -> None:
    logger.set_level(cfg.log_level)
    logger.info("setup.starting")
    validate_config(cfg)
    if not cfg.openai_api_key:
        # the service still starts; every request answers with the config error
        logger.warn("setup.missing_api_key")
    logger.info(
        "setup.completed",
        config={
            "model": cfg.model,
            "temperature": cfg.temperature,
            "token_budget": cfg.token_budget,
            "max_concurrency": cfg.max_concurrency,
            "fetch_timeout_ms": cfg.fetch_timeout_ms,
            "llm_timeout": cfg.llm_timeout,
            "api_base": _mask_url(cfg.openai_api_base),
            "api_key_configured": bool(cfg.openai_api_key),
        },
    )


def create_app(
    cfg: Optional[Config] = None,
    completions: Optional[CompletionClient] = None,
    fetcher: Optional[Fetch] = None,
) -> FastAPI:
    """Build the HTTP app.

    The completion client lives from startup to shutdown on ``app.state``;
    pass ``completions``/``fetcher`` to substitute your own.
    """
    cfg = cfg or load_config()
    setup_and_validate(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        client = completions
        if client is None and cfg.openai_api_key:
            owned = client = CompletionClient(
                api_key=cfg.openai_api_key,
                base_url=cfg.openai_api_base,
                timeout=cfg.llm_timeout,
            )
        app.state.config = cfg
        app.state.completions = client
        app.state.fetcher = fetcher or PageFetcher(user_agent=cfg.user_agent, timeout_ms=cfg.fetch_timeout_ms)
        try:
            yield
        finally:
            if owned is not None:
                await owned.aclose()
            logger.info("app.stopped")

    app = FastAPI(title="URL Summarizer", lifespan=lifespan)
    app.add_exception_handler(SummarizerError, summarize.summarizer_error_handler)
    app.include_router(health.router)
    app.include_router(summarize.router)
    return app


def main() -> int:
    try:
        cfg = load_config()
        app = create_app(cfg)
    except (SetupError, ValueError) as e:
        logger.error("setup.failed", error=str(e))
        return 1
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_level=cfg.log_level if cfg.log_level != "warn" else "warning")
    return 0


if __name__ == "__main__":
    sys.exit(main())
