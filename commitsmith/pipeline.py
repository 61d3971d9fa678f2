"""Commit pipeline orchestration.

Runs one pass of: inspect the repository, build the prompt, generate a
message, validate it, commit. Each stage either hands its output to the next
or raises a CommitsmithError, which moves the pipeline to FAILED. Nothing is
retried and nothing is rolled back; once committing has started it runs to
completion.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from commitsmith import COMMIT_TYPES
from commitsmith.config import AppConfig
from commitsmith.console import Console
from commitsmith.exceptions import CommitsmithError, GenerationError, ValidationError
from commitsmith.git.commit import CommitApplier, CommitResult
from commitsmith.git.inspector import RepositoryInspector, RepositoryState
from commitsmith.llm.base import BaseLLMProvider, Failure
from commitsmith.llm.prompts import build_request
from commitsmith.validation import ValidatedCommitMessage, validate_commit_message


class PipelineStage(Enum):
    """Stages of a single pipeline run."""

    IDLE = "idle"
    INSPECTING = "inspecting"
    PROMPTING = "prompting"
    GENERATING = "generating"
    VALIDATING = "validating"
    COMMITTING = "committing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineResult:
    """What a completed run produced."""

    stage: PipelineStage
    state: Optional[RepositoryState] = None
    message: Optional[ValidatedCommitMessage] = None
    commit: Optional[CommitResult] = None
    history: list[PipelineStage] = field(default_factory=list)

    @property
    def committed(self) -> bool:
        return self.commit is not None


class Pipeline:
    """Sequences inspection, generation, validation and commit for one run."""

    def __init__(
        self,
        config: AppConfig,
        provider: BaseLLMProvider,
        inspector: Optional[RepositoryInspector] = None,
        applier: Optional[CommitApplier] = None,
        console: Optional[Console] = None,
        dry_run: bool = False,
    ):
        self.config = config
        self.provider = provider
        self.inspector = inspector or RepositoryInspector(config.repo_dir, timeout=config.timeout)
        self.applier = applier or CommitApplier(config.repo_dir, timeout=config.timeout)
        self.console = console or Console(show_logs=config.show_logs)
        self.dry_run = dry_run
        self.stage = PipelineStage.IDLE
        self.history = [PipelineStage.IDLE]
        self.error: Optional[CommitsmithError] = None

    def _enter(self, stage: PipelineStage) -> None:
        self.stage = stage
        self.history.append(stage)
        self.console.debug(f"stage: {stage.value}")

    def run(self) -> PipelineResult:
        """Run the pipeline once.

        Returns:
            The PipelineResult of a run that reached DONE.

        Raises:
            CommitsmithError: The error that moved the pipeline to FAILED.
        """
        try:
            return self._run()
        except CommitsmithError as e:
            self.error = e
            self._enter(PipelineStage.FAILED)
            raise

    def _run(self) -> PipelineResult:
        result = PipelineResult(stage=self.stage, history=self.history)

        self._enter(PipelineStage.INSPECTING)
        self.console.info(f"Inspecting changes in {self.config.repo_dir}...")
        state = asyncio.run(self.inspector.capture_state())
        result.state = state
        self.console.debug("git status:", state.status_text)
        self.console.debug(f"diff: {len(state.diff_text)} chars across {len(state.paths)} file(s)")

        self._enter(PipelineStage.PROMPTING)
        request = build_request(
            state.status_text,
            state.diff_text,
            COMMIT_TYPES,
            self.config.scopes,
        )
        self.console.debug(
            f"prompt: {len(request.instructions) + len(request.user_content)} chars",
            request.instructions,
        )

        self._enter(PipelineStage.GENERATING)
        self.console.info(f"Generating commit message with {self.provider.name}...")
        generated = self.provider.generate(request)
        if isinstance(generated, Failure):
            self.console.debug("generation failed:", generated.detail)
            raise GenerationError(generated.reason.value, generated.detail)
        self.console.debug("raw response:", generated.raw_response)

        self._enter(PipelineStage.VALIDATING)
        try:
            message = validate_commit_message(generated.message, COMMIT_TYPES, self.config.scopes)
        except ValidationError as e:
            self.console.error(f"Rejected commit message: {e.message}")
            self.console.debug("valid types: " + ", ".join(COMMIT_TYPES))
            self.console.debug("valid scopes: " + (", ".join(self.config.scopes) or "(any)"))
            raise
        result.message = message
        self.console.info("Generated commit message:")
        self.console.result(message.text)

        if self.dry_run:
            self.console.info("Dry run: nothing was staged or committed.")
            self._enter(PipelineStage.DONE)
            result.stage = self.stage
            return result

        self._enter(PipelineStage.COMMITTING)
        commit = self.applier.apply(message, state)
        result.commit = commit
        self.console.debug("git commit output:", commit.output)
        if commit.hook_exit_ignored:
            self.console.info(
                f"git commit exited with code {commit.exit_code}, "
                "but the commit was created (hook side effect)."
            )

        self._enter(PipelineStage.DONE)
        result.stage = self.stage
        self.console.info("Commit successful!")
        return result
