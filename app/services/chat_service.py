from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from app.ai.types import AIClient, AIProviderError, ChatMessage
from app.core.config import settings
from app.core.errors import ServiceError
from app.core.session_store import Message, SessionStore
from app.prompts.lang import detect_language, is_russian
from app.prompts.templates import get_system_prompts
from app.resume.context import get_resume_context
from app.services.fit_score import extract_fit_score

logger = logging.getLogger("app.chat")

JOB_ASSESSMENT_MARKER = "[Job Assessment Request]"
RATE_LIMIT_MESSAGE = "API rate limit reached. Please try again later."


class ChatServiceError(ServiceError):
    pass


class InvalidRequestError(ChatServiceError):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class RateLimitedError(ChatServiceError):
    def __init__(self, message: str = RATE_LIMIT_MESSAGE):
        super().__init__(message, status_code=429)


class GenerationError(ChatServiceError):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class FeatureDisabledError(ChatServiceError):
    def __init__(self, message: str):
        super().__init__(message, status_code=503)


class EmptyResponseError(RuntimeError):
    pass


@dataclass(frozen=True)
class ChatReply:
    message: str
    session_id: str


@dataclass(frozen=True)
class FitAssessment:
    assessment: str
    fit_score: int | None
    session_id: str


def is_rate_limit_error(exc: BaseException) -> bool:
    if isinstance(exc, AIProviderError) and exc.status_code == 429:
        return True
    text = str(exc).lower()
    return "429" in text or "rate limit" in text


def _require_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(message)
    return value


def history_to_messages(history: Sequence[Message]) -> list[ChatMessage]:
    return [
        ChatMessage(role="user" if m.role == "user" else "assistant", content=m.content)
        for m in history
    ]


def format_job_description_prompt(job_description: str) -> str:
    return f"Job Description:\n{job_description}\n\nPlease provide a detailed assessment."


class ChatService:
    """Runs the general chat and job-fit flows against one session store."""

    def __init__(
        self,
        store: SessionStore,
        ai_client: AIClient | None,
        *,
        candidate_name: str,
        resume_context: Callable[[], str] = get_resume_context,
        chat_enabled: bool = True,
        job_fit_enabled: bool = True,
    ):
        self.store = store
        self._ai = ai_client
        self._candidate_name = candidate_name
        self._resume_context = resume_context
        self._chat_enabled = chat_enabled
        self._job_fit_enabled = job_fit_enabled

    def _preview(self, text: str) -> str:
        return text[: settings.log_message_max_chars]

    def _build_messages(self, system_prompt: str, history: Sequence[Message], user_content: str) -> list[ChatMessage]:
        return [
            ChatMessage(role="system", content=system_prompt),
            *history_to_messages(history),
            ChatMessage(role="user", content=user_content),
        ]

    async def _generate(
        self,
        messages: list[ChatMessage],
        *,
        event: str,
        session_id: str,
        preview: str,
        failure_message: str,
    ) -> str:
        started_at = time.perf_counter()
        try:
            response = await self._ai.chat(messages)
            content = (response.content or "").strip()
            if not content:
                raise EmptyResponseError("No response from AI")
        except Exception as ex:
            rate_limited = is_rate_limit_error(ex)
            logger.exception(
                json.dumps(
                    {
                        "event": f"{event}_error",
                        "session_id": session_id,
                        "input_preview": preview,
                        "rate_limited": rate_limited,
                        "error": str(ex),
                        "duration_ms": int((time.perf_counter() - started_at) * 1000),
                    }
                )
            )
            if rate_limited:
                raise RateLimitedError() from ex
            raise GenerationError(failure_message) from ex

        usage = response.usage
        logger.info(
            json.dumps(
                {
                    "event": f"{event}_complete",
                    "session_id": session_id,
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                    "total_tokens": usage.total_tokens if usage else None,
                }
            )
        )
        return content

    async def chat(self, message: Any, session_id: str | None = None) -> ChatReply:
        message = _require_text(message, "Message is required and must be a non-empty string")
        if not self._chat_enabled or self._ai is None:
            raise FeatureDisabledError("Chat is disabled.")

        session = self.store.get_or_create_session(session_id)
        history = self.store.get_history(session.id)
        russian = is_russian(message)
        prompts = get_system_prompts(self._resume_context(), russian, self._candidate_name)

        logger.info(
            json.dumps(
                {
                    "event": "chat_request",
                    "session_id": session.id,
                    "lang": detect_language(message),
                    "history_len": len(history),
                    "message_len": len(message),
                    "input_preview": self._preview(message),
                }
            )
        )

        reply = await self._generate(
            self._build_messages(prompts.general, history, message),
            event="chat",
            session_id=session.id,
            preview=self._preview(message),
            failure_message="Failed to generate response from AI",
        )

        self.store.add_message(session.id, "user", message)
        self.store.add_message(session.id, "assistant", reply)
        return ChatReply(message=reply, session_id=session.id)

    async def assess_fit(self, job_description: Any, session_id: str | None = None) -> FitAssessment:
        job_description = _require_text(
            job_description, "Job description is required and must be a non-empty string"
        )
        if not self._job_fit_enabled or self._ai is None:
            raise FeatureDisabledError("Job fit assessment is disabled.")

        session = self.store.get_or_create_session(session_id)
        history = self.store.get_history(session.id)
        russian = is_russian(job_description)
        prompts = get_system_prompts(self._resume_context(), russian, self._candidate_name)

        logger.info(
            json.dumps(
                {
                    "event": "assess_fit_request",
                    "session_id": session.id,
                    "lang": detect_language(job_description),
                    "history_len": len(history),
                    "job_description_len": len(job_description),
                    "input_preview": self._preview(job_description),
                }
            )
        )

        assessment = await self._generate(
            self._build_messages(
                prompts.job_assessment, history, format_job_description_prompt(job_description)
            ),
            event="assess_fit",
            session_id=session.id,
            preview=self._preview(job_description),
            failure_message="Failed to generate job assessment",
        )
        fit_score = extract_fit_score(assessment)

        self.store.add_message(session.id, "user", f"{JOB_ASSESSMENT_MARKER}\n{job_description}")
        self.store.add_message(session.id, "assistant", assessment)
        return FitAssessment(assessment=assessment, fit_score=fit_score, session_id=session.id)
