"""Request and Response models of the text generation service (Ollama-style /api/generate, non-streaming)"""

from pydantic import BaseModel, field_validator


class GenerateRequest(BaseModel):
    model: str
    prompt: str
    stream: bool = False


class GenerateResponse(BaseModel):
    """The service sends more fields (timings, context, ...). Only the text is of any use here."""

    response: str
    done: bool = True

    @field_validator("response")
    @classmethod
    def strip_response(cls, value: str) -> str:
        return value.strip()
