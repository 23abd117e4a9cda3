from dataclasses import dataclass
from typing import Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class AIResponse:
    content: str
    usage: TokenUsage | None = None


class ProviderConfigError(RuntimeError):
    """Raised at construction time when the AI provider cannot be configured."""


class AIProviderError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AIClient(Protocol):
    async def chat(self, messages: Sequence[ChatMessage]) -> AIResponse: ...
