"""
models.py

PURPOSE: Pydantic models for completion requests and responses.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
Requests are frozen: they are built fresh for each call and never mutated.
CompletionResponse is validated strictly against the remote body; a body
that does not match raises ValidationError and is never partially accepted.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CodestralModel(str, Enum):
    """Model identifiers served by the completion endpoints."""

    CODESTRAL = "codestral-latest"
    CODESTRAL_MAMBA = "codestral-mamba-latest"


PRIMARY_MODEL = CodestralModel.CODESTRAL


class Role(str, Enum):
    """Message roles."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class TaskKind(str, Enum):
    """Kinds of code task a prompt can be built for."""

    COMPLETE = "complete"
    FIX = "fix"
    TEST = "test"
    FIM = "fim"


class Message(BaseModel):
    """A message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatOptions(BaseModel):
    """Sampling options for a chat completion."""

    model_config = ConfigDict(frozen=True)

    model: CodestralModel = PRIMARY_MODEL
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=1.0, gt=0.0, le=1.0)
    max_tokens: int = Field(default=1000, gt=0)
    stop: list[str] | None = None


class FimOptions(ChatOptions):
    """
    Options for a fill-in-the-middle completion.

    Temperature defaults to 0 for deterministic infill. The model field is
    accepted but the FIM endpoint is always called with the primary model.
    """

    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    suffix: str | None = None


class CompletionRequest(BaseModel):
    """Payload for POST /chat/completions."""

    model_config = ConfigDict(frozen=True)

    model: CodestralModel
    messages: list[Message] = Field(..., min_length=1)
    temperature: float = Field(..., ge=0.0, le=2.0)
    top_p: float = Field(..., gt=0.0, le=1.0)
    max_tokens: int = Field(..., gt=0)
    stop: list[str] | None = None

    @classmethod
    def from_options(cls, messages: list[Message], options: ChatOptions) -> "CompletionRequest":
        return cls(
            model=options.model,
            messages=messages,
            temperature=options.temperature,
            top_p=options.top_p,
            max_tokens=options.max_tokens,
            stop=options.stop,
        )


class FimRequest(BaseModel):
    """Payload for POST /fim/completions."""

    model_config = ConfigDict(frozen=True)

    model: CodestralModel = PRIMARY_MODEL
    prompt: str
    suffix: str | None = None
    temperature: float = Field(..., ge=0.0, le=2.0)
    top_p: float = Field(..., gt=0.0, le=1.0)
    max_tokens: int = Field(..., gt=0)
    stop: list[str] | None = None

    @classmethod
    def from_options(cls, prompt: str, options: FimOptions) -> "FimRequest":
        return cls(
            model=PRIMARY_MODEL,
            prompt=prompt,
            suffix=options.suffix,
            temperature=options.temperature,
            top_p=options.top_p,
            max_tokens=options.max_tokens,
            stop=options.stop,
        )


class Usage(BaseModel):
    """Token accounting for a completion."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class Choice(BaseModel):
    """A single choice in a completion response."""

    index: int
    message: Message
    finish_reason: str | None = None


class CompletionResponse(BaseModel):
    """Validated completion response body."""

    id: str
    object: str | None = None
    created: int
    model: str
    choices: list[Choice]
    usage: Usage

    @property
    def content(self) -> str | None:
        """Content of the first choice, if there is one."""
        if not self.choices:
            return None
        return self.choices[0].message.content
