"""LLM client for the Lab45 completion skill."""

from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from pr_reviewer.config import Settings
from pr_reviewer.core.logging import get_logger

logger = get_logger("llm")

# Fixed for every request, see
# https://docs.lab45.ai/openapi_elements.html#/paths/v1.1-skills-skill_id--query/post
SKILL_PARAMETERS = {
    "temperature": 0.2,
    "max_output_tokens": 700,
    "top_p": 1,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}


class CompletionContent(BaseModel):
    content: Optional[str] = None


class CompletionResponse(BaseModel):
    data: CompletionContent


def build_request_body(prompt: str, model_name: str | None) -> dict:
    """Build the skill query body for a single user message."""
    return {
        "messages": [{"role": "user", "content": prompt}],
        "skill_parameters": {"model_name": model_name, **SKILL_PARAMETERS},
        "stream_response": False,
    }


class CompletionClient:
    """Sends one prompt per call and returns the raw reply text.

    Every failure is logged and reported as ``None`` so a single hunk can
    never abort the run. There is no retry.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._url = settings.lab45_api_url
        self._model = settings.lab45_api_model
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {settings.lab45_api_key}",
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()

    async def __aenter__(self) -> "CompletionClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def complete(self, prompt: str) -> Optional[str]:
        """POST the prompt; return the stripped reply, ``"{}"`` if blank, ``None`` on failure."""
        try:
            response = await self._client.post(
                self._url,
                headers=self._headers,
                json=build_request_body(prompt, self._model),
            )
            response.raise_for_status()
            payload = CompletionResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(f"Completion request rejected: HTTP {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Completion request failed: {e!r}")
            return None
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed completion response: {e}")
            return None

        return (payload.data.content or "").strip() or "{}"
