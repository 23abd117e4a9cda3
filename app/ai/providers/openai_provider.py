from __future__ import annotations

from typing import Any, Optional, Sequence

from openai import APIError, APIStatusError, AsyncOpenAI

from app.ai.types import AIProviderError, AIResponse, ChatMessage, TokenUsage


class OpenAICompatibleProvider:
    """Chat-completion client for any endpoint speaking the OpenAI wire format."""

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        client: Any = None,
    ):
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    @property
    def model(self) -> str:
        return self._model

    async def chat(self, messages: Sequence[ChatMessage]) -> AIResponse:
        payload = [{"role": m.role, "content": m.content} for m in messages]

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=payload,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except APIStatusError as exc:
            raise AIProviderError(
                f"AI provider request failed: {exc}", status_code=exc.status_code
            ) from exc
        except APIError as exc:
            raise AIProviderError(f"AI provider request failed: {exc}") from exc

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        usage = None
        if response.usage is not None:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
        return AIResponse(content=content, usage=usage)
