from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRequest(CamelModel):
    message: str | None = None
    session_id: str | None = None


class AssessFitRequest(CamelModel):
    job_description: str | None = None
    session_id: str | None = None


class ChatResponse(CamelModel):
    message: str
    session_id: str


class AssessFitResponse(CamelModel):
    assessment: str
    fit_score: int | None = None
    session_id: str


class ClearSessionResponse(CamelModel):
    cleared: bool


class SessionStatsResponse(CamelModel):
    total_sessions: int
    session_ages: list[int]
    average_history_length: float


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
