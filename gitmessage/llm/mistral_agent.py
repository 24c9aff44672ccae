"""Mistral AI agent provider.

Sends the prompt as the only user message to a preconfigured agent through
the agents completion endpoint.
"""

from typing import Optional

import httpx

from gitmessage.config import Settings
from gitmessage.llm.base import BaseLLMProvider, LLMResult, parse_completion_response
from gitmessage.llm.exceptions import GenerationError, MissingAPIKeyError
from gitmessage.logging import get_logger

logger = get_logger(__name__)


class MistralAgentProvider(BaseLLMProvider):
    """Commit message generator backed by a Mistral AI agent."""

    def __init__(
        self,
        api_key: Optional[str],
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the provider.

        Args:
            api_key: Mistral API key.
            settings: Endpoint, agent id and timeout. Defaults to Settings().
            client: HTTP client to use. A short-lived one is created per call
                when omitted.

        Raises:
            MissingAPIKeyError: If no API key is given.
        """
        if not api_key:
            raise MissingAPIKeyError(
                "Mistral AI API key not found. Set it using:\n"
                "  1. Environment variable: export MISTRAL_API_KEY=your_key_here\n"
                "  2. Run: gitmessage config set-key\n"
                "  3. Manually add to ~/.gitmessage/credentials"
            )
        self.api_key = api_key
        self.settings = settings or Settings()
        self._client = client

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _post(self, client: httpx.Client, body: dict) -> httpx.Response:
        response = client.post(
            self.settings.api_url,
            json=body,
            headers=self._get_headers(),
            timeout=self.settings.timeout,
        )
        response.raise_for_status()
        return response

    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message using the Mistral agent.

        Args:
            prompt: The full prompt string.

        Returns:
            An LLMResult with the trimmed message and token usage.

        Raises:
            GenerationError: On transport errors, error statuses or a malformed response.
        """
        body = {
            "agent_id": self.settings.agent_id,
            "messages": [{"role": "user", "content": prompt}],
        }
        logger.info("agent_request", agent_id=self.settings.agent_id, prompt_chars=len(prompt))

        try:
            if self._client is not None:
                response = self._post(self._client, body)
            else:
                with httpx.Client() as client:
                    response = self._post(client, body)
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise GenerationError(
                f"Mistral AI agent returned HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise GenerationError(f"Mistral AI agent call failed: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Invalid response from Mistral AI agent: {e}") from e

        completion = parse_completion_response(payload)
        message = completion.choices[0].message.content.strip()
        usage = completion.usage

        logger.info("agent_response", message_chars=len(message))

        return LLMResult(
            message=message,
            agent_id=self.settings.agent_id,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )
