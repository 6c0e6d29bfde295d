"""
Step ledger for multi-store operations.

Ingestion and deletion touch three stores that share no transaction. Each
orchestrator runs its steps inside a StepLedger stage; completed steps are
recorded together with the compensating action that would undo them. The
compensation is never executed here: when a later step fails, the ledger is
attached to the raised error so the leftover writes are visible to the
caller and in the logs.

Dependencies: contextlib, dataclasses, linkshelf.core.exceptions, linkshelf.observability
System role: Explicit saga bookkeeping for ingestion and deletion
"""

import enum
import logging
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Iterator

from linkshelf.core.exceptions import (
    EmbeddingError,
    FetchError,
    LinkShelfException,
    ProcessingError,
    StoreError,
)
from linkshelf.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class Stage(str, enum.Enum):
    """Orchestrator steps, in the order they run."""

    # ingestion
    FETCH = "fetch"
    SUMMARIZE = "summarize"
    EMBED = "embed"
    VECTOR_INSERT = "vector_insert"
    BLOB_PUT = "blob_put"
    METADATA_SAVE = "metadata_save"
    # deletion
    METADATA_DELETE = "metadata_delete"
    BLOB_DELETE = "blob_delete"
    VECTOR_DELETE = "vector_delete"


# Error class used when a collaborator raises something outside the taxonomy
_STAGE_ERRORS: dict[Stage, type[LinkShelfException]] = {
    Stage.FETCH: FetchError,
    Stage.SUMMARIZE: ProcessingError,
    Stage.EMBED: EmbeddingError,
}

_STAGE_STORES: dict[Stage, str] = {
    Stage.VECTOR_INSERT: "vector",
    Stage.BLOB_PUT: "blob",
    Stage.METADATA_SAVE: "metadata",
    Stage.METADATA_DELETE: "metadata",
    Stage.BLOB_DELETE: "blob",
    Stage.VECTOR_DELETE: "vector",
}


@dataclass(frozen=True)
class CompletedStep:
    """A step that already changed a store."""

    stage: Stage
    resource: str
    compensation: str

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["stage"] = self.stage.value
        return data


class StepLedger:
    """
    Ordered record of one orchestrator run.

    Usage:
        ledger = StepLedger("ingest", subject=url)
        with ledger.stage(Stage.BLOB_PUT):
            await blob_store.put(path, content, content_type)
        ledger.complete(Stage.BLOB_PUT, path, compensation="delete blob")
    """

    def __init__(self, operation: str, subject: str) -> None:
        """
        Initialize ledger.

        Args:
            operation: Orchestrator name (ingest, delete)
            subject: URL or id the operation is about
        """
        self.operation = operation
        self.subject = subject
        self.completed: list[CompletedStep] = []

    def complete(self, stage: Stage, resource: str, compensation: str) -> None:
        """Record a finished step and how it would be undone."""
        self.completed.append(CompletedStep(stage, resource, compensation))

    @contextmanager
    def stage(self, stage: Stage) -> Iterator[None]:
        """
        Run one step; on failure raise a single terminal error for it.

        Errors from the taxonomy keep their type. Anything else is wrapped in
        the stage's error class with the original chained as __cause__.
        The error's details gain operation, stage and completed_steps.

        Args:
            stage: Step being executed

        Raises:
            LinkShelfException: Annotated error for the failed step
        """
        try:
            yield
        except LinkShelfException as e:
            self._annotate(e, stage)
            self._log_failure(e, stage)
            raise
        except Exception as e:
            wrapped = self._wrap(e, stage)
            self._annotate(wrapped, stage)
            self._log_failure(wrapped, stage)
            raise wrapped from e

    def _wrap(self, exc: Exception, stage: Stage) -> LinkShelfException:
        message = f"{self.operation} failed at {stage.value}: {type(exc).__name__}: {exc}"
        if stage in _STAGE_STORES:
            return StoreError(message, store=_STAGE_STORES[stage], operation=stage.value)
        return _STAGE_ERRORS[stage](message)

    def _annotate(self, exc: LinkShelfException, stage: Stage) -> None:
        exc.details.setdefault("operation", self.operation)
        exc.details.setdefault("stage", stage.value)
        exc.details.setdefault("completed_steps", [step.to_dict() for step in self.completed])

    def _log_failure(self, exc: LinkShelfException, stage: Stage) -> None:
        if self.completed:
            left_behind = ", ".join(f"{step.stage.value}:{step.resource}" for step in self.completed)
            log_exception_with_context(
                logger,
                f"{__name__}:stage - {self.operation} aborted at {stage.value} with "
                f"{len(self.completed)} uncompensated step(s) [{left_behind}]: {exc.message}",
                exc,
                subject=self.subject,
                stage=stage.value,
            )
        else:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:stage - {self.operation} aborted at {stage.value}: {exc.message}",
                subject=self.subject,
                stage=stage.value,
            )
