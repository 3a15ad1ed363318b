"""Failure taxonomy for the sample workflow.

Every fatal classification carries the name of the step that produced it and
the raw payload received from the service, so a caller can render a
diagnostic or decide to retry. ``retryable`` separates infrastructure
failures (timeouts, unreachable server) from protocol and contract failures.
"""
from __future__ import annotations

from typing import Any, Optional


class WorkflowStepError(RuntimeError):
    """Base class for failures that halt the workflow."""

    kind = "workflow_error"
    retryable = False

    def __init__(self, step: str, message: str, payload: Optional[Any] = None) -> None:
        super().__init__(f"{step}: {message}")
        self.step = step
        self.message = message
        self.payload = payload


class TransportFailure(WorkflowStepError):
    """The request could not be sent or no response was received."""

    kind = "transport_failure"

    def __init__(
        self,
        step: str,
        message: str,
        payload: Optional[Any] = None,
        *,
        retryable: bool = False,
    ) -> None:
        super().__init__(step, message, payload)
        self.retryable = retryable


class ServerErrorResponse(WorkflowStepError):
    """The service answered with a JSON-RPC ``error`` member."""

    kind = "server_error"


class MalformedResponse(WorkflowStepError):
    """The response lacks ``result.content[0].text``."""

    kind = "malformed_response"


class MissingIdentifier(WorkflowStepError):
    """No identifier could be found where a later step needs one."""

    kind = "missing_identifier"
