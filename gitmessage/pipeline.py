"""Commit message pipeline.

Runs collect → prompt → request → publish for one working tree and turns
every failure into a typed PipelineResult. The host (CLI, editor, hook)
plugs in through three capabilities:

- ConfigSource: where the API key comes from
- MessageSink: where the generated message goes
- Notifier: how the user is told what happened
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from gitmessage.config import Settings
from gitmessage.git import (
    ChangeSet,
    CollectionError,
    NoChangesError,
    NoWorkspaceError,
    collect_changes,
    get_repo_root,
)
from gitmessage.llm import (
    BaseLLMProvider,
    LLMError,
    MissingAPIKeyError,
    build_and_request,
)
from gitmessage.logging import get_logger


SET_KEY_REMEDY = "Run 'gitmessage config set-key' to store your Mistral AI API key."


class SinkUnavailableError(Exception):
    """Raised when a sink has nowhere to put the message."""

    pass


class Outcome(Enum):
    """Result kinds of one pipeline run."""

    SUCCESS = "success"
    NO_WORKSPACE = "no_workspace"
    NO_CHANGES = "no_changes"
    COLLECTION_FAILURE = "collection_failure"
    MISSING_CREDENTIAL = "missing_credential"
    GENERATION_ERROR = "generation_error"
    SINK_UNAVAILABLE = "sink_unavailable"
    BUSY = "busy"

    @property
    def is_error(self) -> bool:
        """Whether the outcome is reported as an error rather than a notice."""
        return self not in (Outcome.SUCCESS, Outcome.NO_WORKSPACE, Outcome.NO_CHANGES, Outcome.BUSY)


@dataclass(frozen=True)
class PipelineResult:
    """What one run produced."""

    outcome: Outcome
    message: Optional[str] = None
    detail: str = ""
    change_set: Optional[ChangeSet] = None


class ConfigSource(ABC):
    """Provides the credential for the remote agent."""

    @abstractmethod
    def get_credential(self) -> Optional[str]:
        """Return the API key, or None if it is not configured."""
        pass


class MessageSink(ABC):
    """Receives the generated commit message."""

    @abstractmethod
    def publish(self, text: str) -> None:
        """Deliver the message.

        Raises:
            SinkUnavailableError: If the message cannot be delivered.
        """
        pass


class Notifier(ABC):
    """Reports pipeline outcomes to the user."""

    @abstractmethod
    def info(self, text: str) -> None:
        pass

    @abstractmethod
    def error(self, text: str, remedy: Optional[str] = None) -> None:
        pass


class CommitMessagePipeline:
    """Generates a commit message for a working tree and hands it to a sink.

    Only one run may be in flight per pipeline; a concurrent call returns
    Outcome.BUSY without touching git or the network.
    """

    def __init__(
        self,
        config_source: ConfigSource,
        sink: MessageSink,
        notifier: Notifier,
        settings: Optional[Settings] = None,
        logger=None,
        provider_factory: Optional[Callable[[str, Settings], BaseLLMProvider]] = None,
    ):
        """Initialize the pipeline.

        Args:
            config_source: Credential lookup.
            sink: Destination of the generated message.
            notifier: User-facing notices.
            settings: Runtime settings. Defaults to Settings().
            logger: Structured logger. Defaults to this module's logger.
            provider_factory: Builds the provider from (api_key, settings).
                Defaults to a MistralAgentProvider.
        """
        self.config_source = config_source
        self.sink = sink
        self.notifier = notifier
        self.settings = settings or Settings()
        self.logger = logger or get_logger(__name__)
        self.provider_factory = provider_factory
        self._in_flight = threading.Lock()

    def run(self, workspace: Optional[Union[str, Path]]) -> PipelineResult:
        """Run the pipeline once and report the outcome through the notifier.

        Args:
            workspace: Any directory inside the working tree, or None when the
                host has no workspace open.

        Returns:
            The PipelineResult of this run.
        """
        if not self._in_flight.acquire(blocking=False):
            result = PipelineResult(
                outcome=Outcome.BUSY,
                detail="A commit message is already being generated.",
            )
            self.logger.info("run_skipped", reason="busy")
            self._report(result)
            return result

        try:
            result = self._run(workspace)
        finally:
            self._in_flight.release()

        self._report(result)
        return result

    def _run(self, workspace: Optional[Union[str, Path]]) -> PipelineResult:
        log = self.logger

        # Step 1: resolve the working tree
        if workspace is None:
            return PipelineResult(outcome=Outcome.NO_WORKSPACE, detail="No workspace folder open.")
        try:
            repo_root = get_repo_root(workspace)
        except NoWorkspaceError as e:
            log.info("no_workspace", workspace=str(workspace))
            return PipelineResult(outcome=Outcome.NO_WORKSPACE, detail=str(e))

        log = log.bind(repo_root=str(repo_root))

        # Step 2: collect changes
        try:
            change_set = collect_changes(repo_root, logger=log)
        except CollectionError as e:
            log.error("collection_failed", error=str(e))
            return PipelineResult(outcome=Outcome.COLLECTION_FAILURE, detail=str(e))

        if change_set.is_empty:
            log.info("no_changes")
            return PipelineResult(
                outcome=Outcome.NO_CHANGES,
                detail="No changes detected to generate commit message.",
                change_set=change_set,
            )

        # Step 3: generate the message
        api_key = self.config_source.get_credential()
        try:
            provider = None
            if api_key and self.provider_factory is not None:
                provider = self.provider_factory(api_key, self.settings)
            llm_result = build_and_request(change_set, api_key, self.settings, provider=provider)
        except MissingAPIKeyError as e:
            log.warning("missing_credential")
            return PipelineResult(outcome=Outcome.MISSING_CREDENTIAL, detail=str(e), change_set=change_set)
        except NoChangesError as e:
            return PipelineResult(outcome=Outcome.NO_CHANGES, detail=str(e), change_set=change_set)
        except LLMError as e:
            log.error("generation_failed", error=str(e))
            return PipelineResult(outcome=Outcome.GENERATION_ERROR, detail=str(e), change_set=change_set)

        log.info(
            "message_generated",
            agent_id=llm_result.agent_id,
            input_tokens=llm_result.input_tokens,
            output_tokens=llm_result.output_tokens,
        )

        # Step 4: deliver it
        try:
            self.sink.publish(llm_result.message)
        except SinkUnavailableError as e:
            log.error("sink_unavailable", error=str(e))
            return PipelineResult(
                outcome=Outcome.SINK_UNAVAILABLE,
                message=llm_result.message,
                detail=str(e),
                change_set=change_set,
            )

        return PipelineResult(
            outcome=Outcome.SUCCESS,
            message=llm_result.message,
            detail="Commit message generated successfully!",
            change_set=change_set,
        )

    def _report(self, result: PipelineResult) -> None:
        if result.outcome == Outcome.SUCCESS:
            self.notifier.info(result.detail)
        elif result.outcome == Outcome.MISSING_CREDENTIAL:
            self.notifier.error(result.detail, remedy=SET_KEY_REMEDY)
        elif result.outcome == Outcome.GENERATION_ERROR:
            self.notifier.error(f"Error generating commit message: {result.detail}")
        elif result.outcome.is_error:
            self.notifier.error(result.detail)
        else:
            self.notifier.info(result.detail)
