"""Error taxonomy for the generation pipeline."""

from typing import Optional


class NeurogameError(Exception):
    """Base class for all errors raised by neurogame."""


class RequestValidationError(NeurogameError):
    """Raised when a request is malformed or the task is missing.

    Handled at the boundary; a run is never started for an invalid request.
    """


class RegistryError(NeurogameError, ValueError):
    """Raised when a stage table is not a valid topological order."""


class ProviderError(NeurogameError):
    """Raised by a provider when its single outbound call fails."""

    def __init__(self, provider_id: str, message: str):
        super().__init__(f"{provider_id}: {message}")
        self.provider_id = provider_id
        self.message = message


class PipelineError(NeurogameError):
    """Base class for errors that terminate a run at a given stage."""

    kind = "pipeline"

    def __init__(self, stage_id: str, cause: Optional[BaseException] = None):
        self.stage_id = stage_id
        self.cause = cause
        detail = str(cause) if cause is not None else "unknown error"
        super().__init__(f"Stage '{stage_id}' failed: {detail}")


class InvocationError(PipelineError):
    """A stage's provider call failed."""

    kind = "invocation"


class UnexpectedError(PipelineError):
    """Anything else that went wrong while a stage was running."""

    kind = "unexpected"
