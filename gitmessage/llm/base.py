"""Base classes and shared utilities for the commit message agent."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from gitmessage.llm.exceptions import GenerationError


@dataclass
class LLMResult:
    """Result from an agent call, including token usage."""

    message: str
    agent_id: str
    input_tokens: int = 0
    output_tokens: int = 0


class ChoiceMessage(BaseModel):
    """The message of one completion choice."""

    content: str

    @field_validator("content")
    @classmethod
    def content_must_not_be_blank(cls, v: str) -> str:
        """Ensure the agent actually wrote something."""
        if not v or not v.strip():
            raise ValueError("content cannot be empty")
        return v


class Choice(BaseModel):
    """One completion choice."""

    message: ChoiceMessage


class Usage(BaseModel):
    """Token usage reported by the service."""

    prompt_tokens: int = 0
    completion_tokens: int = 0


class CompletionResponse(BaseModel):
    """Pydantic model for the agent completion response.

    Only the fields gitmessage reads are declared; anything else the service
    sends is ignored.
    """

    choices: list[Choice]
    usage: Optional[Usage] = None

    @field_validator("choices")
    @classmethod
    def choices_must_not_be_empty(cls, v: list[Choice]) -> list[Choice]:
        """Ensure there is at least one choice."""
        if not v:
            raise ValueError("choices cannot be empty")
        return v


def parse_completion_response(payload) -> CompletionResponse:
    """Validate a decoded JSON response against CompletionResponse.

    Args:
        payload: The decoded JSON body.

    Returns:
        A validated CompletionResponse.

    Raises:
        GenerationError: If the payload does not have the expected shape.
    """
    try:
        return CompletionResponse.model_validate(payload)
    except ValidationError as e:
        raise GenerationError(f"Invalid response from agent:\n{e}") from e


class BaseLLMProvider(ABC):
    """Abstract base class for commit message generators."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message for a prompt.

        Args:
            prompt: The full prompt, instructions and diff included.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            GenerationError: If the call fails or the response is malformed.
        """
        pass
