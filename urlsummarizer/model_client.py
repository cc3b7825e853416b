import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from .errors import ModelError
from .logging import logger


@dataclass(frozen=True)
class Completion:
    text: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


def _upstream_body(e: openai.APIStatusError) -> Any:
    """The upstream error payload exactly as sent, when it was JSON."""
    try:
        return e.response.json()
    except ValueError:
        return {"error": {"message": e.message}}


class CompletionClient:
    """Chat-completion access for one process lifetime.

    Built once at startup and handed to the orchestrator; requests never
    retry, and ``timeout=0`` waits indefinitely.
    """

    def __init__(self, api_key: str, base_url: Optional[str] = None, timeout: float = 0,
                 client: Optional[AsyncOpenAI] = None):
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or None,
            timeout=(timeout if timeout > 0 else None),
            max_retries=0,
        )

    async def complete(self, messages: List[Dict[str, str]], model: str, temperature: float) -> Completion:
        t0 = time.time()
        try:
            resp = await self._client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
            )
        except openai.APIStatusError as e:
            body = _upstream_body(e)
            logger.error("llm.error", model=model, status=e.status_code, body=body)
            raise ModelError(f"upstream status {e.status_code}", status_code=e.status_code, body=body) from e
        except openai.OpenAIError as e:
            # connection failures and timeouts carry no upstream response
            logger.error("llm.error", model=model, error=str(e))
            raise ModelError(str(e)) from e

        if not resp.choices:
            raise ModelError("completion returned no choices")
        usage = resp.usage
        completion = Completion(
            text=resp.choices[0].message.content or "",
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            total_tokens=usage.total_tokens if usage else 0,
        )
        logger.info(
            "llm.done",
            model=model,
            latency_ms=int((time.time() - t0) * 1000),
            total_tokens=completion.total_tokens,
        )
        return completion

    async def aclose(self) -> None:
        await self._client.close()
