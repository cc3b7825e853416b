import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36"
)


class SetupError(Exception):
    """Raised when the service configuration is unusable."""
    pass


@dataclass
class Config:
    openai_api_key: Optional[str]
    openai_api_base: Optional[str]
    model: str
    temperature: float
    token_budget: int
    max_concurrency: int
    fetch_timeout_ms: int
    llm_timeout: float
    user_agent: str
    log_level: str
    host: str
    port: int


def _env_str(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_config() -> Config:
    """Read configuration from the environment.

    A missing OPENAI_API_KEY is not fatal here: the HTTP layer reports it on
    every request instead.
    """
    return Config(
        openai_api_key=_env_str("OPENAI_API_KEY"),
        openai_api_base=_env_str("OPENAI_API_BASE"),
        model=os.environ.get("OPENAI_MODEL", "gpt-3.5-turbo"),
        temperature=float(os.environ.get("LLM_TEMPERATURE", "0.4")),
        token_budget=int(os.environ.get("TOKEN_BUDGET", "1000")),
        max_concurrency=int(os.environ.get("MAX_CONCURRENCY", "0")),
        fetch_timeout_ms=int(os.environ.get("FETCH_TIMEOUT_MS", "0")),
        llm_timeout=float(os.environ.get("LLM_TIMEOUT", "0")),
        user_agent=os.environ.get("USER_AGENT", DEFAULT_USER_AGENT),
        log_level=os.environ.get("LOG_LEVEL", "info").lower(),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
    )


def validate_config(cfg: Config) -> None:
    if not cfg.model or not cfg.model.strip():
        raise SetupError("OPENAI_MODEL must not be empty")
    if cfg.temperature < 0 or cfg.temperature > 2:
        raise SetupError(f"LLM_TEMPERATURE must be 0-2, got {cfg.temperature}")
    if cfg.token_budget < 1:
        raise SetupError(f"TOKEN_BUDGET must be > 0, got {cfg.token_budget}")
    if cfg.max_concurrency < 0:
        raise SetupError(f"MAX_CONCURRENCY must be >= 0, got {cfg.max_concurrency}")
    if cfg.fetch_timeout_ms < 0:
        raise SetupError(f"FETCH_TIMEOUT_MS must be >= 0, got {cfg.fetch_timeout_ms}")
    if cfg.llm_timeout < 0:
        raise SetupError(f"LLM_TIMEOUT must be >= 0, got {cfg.llm_timeout}")
    if cfg.openai_api_base and not cfg.openai_api_base.startswith(("http://", "https://")):
        raise SetupError(f"OPENAI_API_BASE must be a valid URL, got: {cfg.openai_api_base}")
    if not (0 < cfg.port < 65536):
        raise SetupError(f"PORT must be 1-65535, got {cfg.port}")
