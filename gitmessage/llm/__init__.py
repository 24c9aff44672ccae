"""LLM module for gitmessage.

Turns a ChangeSet into a prompt and asks the remote agent for a commit message.
"""

from typing import Optional

from gitmessage.config import Settings
from gitmessage.git.exceptions import NoChangesError
from gitmessage.git.models import ChangeSet
from gitmessage.llm.base import BaseLLMProvider, LLMResult
from gitmessage.llm.exceptions import GenerationError, LLMError, MissingAPIKeyError
from gitmessage.llm.mistral_agent import MistralAgentProvider
from gitmessage.llm.prompt import build_prompt


def build_and_request(
    change_set: ChangeSet,
    api_key: Optional[str],
    settings: Optional[Settings] = None,
    provider: Optional[BaseLLMProvider] = None,
) -> LLMResult:
    """Generate a commit message for a ChangeSet.

    This is the main entry point for generating commit messages. No request
    is made when the API key is missing or there is nothing to describe.

    Args:
        change_set: The collected changes.
        api_key: Mistral API key.
        settings: Runtime settings. Defaults to Settings().
        provider: Provider to use instead of a MistralAgentProvider.

    Returns:
        An LLMResult containing the trimmed commit message.

    Raises:
        MissingAPIKeyError: If the API key is not set.
        NoChangesError: If the ChangeSet has neither a diff nor new files.
        GenerationError: If the agent call fails.
    """
    settings = settings or Settings()

    if not api_key:
        raise MissingAPIKeyError(
            "Mistral AI API key not found. Please set it with 'gitmessage config set-key'."
        )
    if change_set.is_empty:
        raise NoChangesError("No changes detected to generate commit message.")

    prompt = build_prompt(change_set, max_diff_chars=settings.max_diff_chars)
    provider = provider or MistralAgentProvider(api_key=api_key, settings=settings)
    return provider.generate(prompt)


# Export commonly used items
__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "GenerationError",
    "LLMResult",
    "MistralAgentProvider",
    "build_and_request",
    "build_prompt",
]
