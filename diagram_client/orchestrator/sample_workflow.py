"""Build the sample UML diagram through a fixed chain of tool calls.

Each step sends one ``tools/call`` request and waits for its answer before
the next one is considered. Ids captured from earlier answers travel in a
:class:`WorkflowContext` that every step receives and returns.

Cleanup steps only log a server error or a reply without result text; a
body that is not a JSON object is fatal there as well. Any other step halts
the run on a server error, a malformed answer or a missing id by raising a
:class:`~diagram_client.errors.WorkflowStepError`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol

from diagram_client.errors import (
    MalformedResponse,
    MissingIdentifier,
    ServerErrorResponse,
    TransportFailure,
    WorkflowStepError,
)
from diagram_client.mcp.envelope import RequestId, build_tool_call
from diagram_client.mcp.interpreter import Malformed, Outcome, ServerError, interpret
from diagram_client.models.uml import UmlClass, UmlEdge, car_class, person_class
from diagram_client.tools.id_extractor import IdPattern, extract_identifier
from diagram_client.utils.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    CLEANUP_PREVIOUS = "CleanupPrevious"
    CLEANUP_EMPTY = "CleanupEmpty"
    CREATE_DIAGRAM = "CreateDiagram"
    CREATE_ENTITY_A = "CreateEntityA"
    CREATE_ENTITY_B = "CreateEntityB"
    CREATE_EDGE = "CreateEdge"
    DONE = "Done"
    FAILED = "Failed"


class Transport(Protocol):
    """Posts one JSON-RPC payload and returns the raw response body."""

    def send(self, payload: Dict[str, Any]) -> Any:
        ...


@dataclass(frozen=True)
class WorkflowContext:
    diagram_id: Optional[str] = None
    entity_a_id: Optional[str] = None
    entity_b_id: Optional[str] = None


@dataclass
class StepRecord:
    step: WorkflowState
    tool_name: str
    request_id: RequestId
    outcome: Outcome


@dataclass
class SampleUmlWorkflow:
    """Runs the cleanup, diagram, class and edge steps once."""

    transport: Transport
    settings: Settings = field(default_factory=lambda: default_settings)
    entity_a: UmlClass = field(default_factory=person_class)
    entity_b: UmlClass = field(default_factory=car_class)
    edge_label: str = "owns"
    skip_cleanup: bool = False
    state: WorkflowState = WorkflowState.CLEANUP_PREVIOUS
    history: List[StepRecord] = field(default_factory=list)

    def run(self, context: Optional[WorkflowContext] = None) -> WorkflowContext:
        context = context or WorkflowContext()
        steps: List[tuple[WorkflowState, Callable[[WorkflowContext], WorkflowContext]]] = [
            (WorkflowState.CLEANUP_PREVIOUS, self.cleanup_previous),
            (WorkflowState.CLEANUP_EMPTY, self.cleanup_empty),
            (WorkflowState.CREATE_DIAGRAM, self.create_diagram),
            (WorkflowState.CREATE_ENTITY_A, self.create_entity_a),
            (WorkflowState.CREATE_ENTITY_B, self.create_entity_b),
            (WorkflowState.CREATE_EDGE, self.create_edge),
        ]
        if self.skip_cleanup:
            steps = steps[2:]
        for state, step in steps:
            self.state = state
            try:
                context = step(context)
            except WorkflowStepError:
                self.state = WorkflowState.FAILED
                raise
        self.state = WorkflowState.DONE
        logger.info("Sample UML diagram %s complete", context.diagram_id)
        return context

    # ------------------------------------------------------------------
    # steps

    def cleanup_previous(self, context: WorkflowContext) -> WorkflowContext:
        self._cleanup(WorkflowState.CLEANUP_PREVIOUS, self.settings.previous_diagram_id, 0, "previous diagram")
        return context

    def cleanup_empty(self, context: WorkflowContext) -> WorkflowContext:
        self._cleanup(WorkflowState.CLEANUP_EMPTY, self.settings.empty_diagram_id, 0.5, "empty sample diagram")
        return context

    def create_diagram(self, context: WorkflowContext) -> WorkflowContext:
        text = self._call_required(
            WorkflowState.CREATE_DIAGRAM,
            "create_diagram",
            {"diagramType": "uml", "name": "Sample UML Diagram"},
            1,
        )
        diagram_id = self._require_id(WorkflowState.CREATE_DIAGRAM, text, IdPattern.DIAGRAM)
        logger.info("UML diagram id: %s", diagram_id)
        return replace(context, diagram_id=diagram_id)

    def create_entity_a(self, context: WorkflowContext) -> WorkflowContext:
        entity_id = self._add_class(WorkflowState.CREATE_ENTITY_A, context, self.entity_a, 2)
        return replace(context, entity_a_id=entity_id)

    def create_entity_b(self, context: WorkflowContext) -> WorkflowContext:
        entity_id = self._add_class(WorkflowState.CREATE_ENTITY_B, context, self.entity_b, 3)
        return replace(context, entity_b_id=entity_id)

    def create_edge(self, context: WorkflowContext) -> WorkflowContext:
        step = WorkflowState.CREATE_EDGE
        diagram_id = self._require_context(step, context, "diagram_id")
        source_id = self._require_context(step, context, "entity_a_id")
        target_id = self._require_context(step, context, "entity_b_id")
        edge = UmlEdge(source_id=source_id, target_id=target_id, label=self.edge_label)
        self._call_required(step, "create_edge", edge.to_arguments(diagram_id), 4)
        logger.info(
            "Association edge added between %s and %s", self.entity_a.name, self.entity_b.name
        )
        return context

    # ------------------------------------------------------------------
    # helpers

    def _add_class(
        self, step: WorkflowState, context: WorkflowContext, uml_class: UmlClass, request_id: RequestId
    ) -> str:
        diagram_id = self._require_context(step, context, "diagram_id")
        text = self._call_required(step, "add_uml_class", uml_class.to_arguments(diagram_id), request_id)
        entity_id = self._require_id(step, text, IdPattern.ENTITY)
        logger.info("%s class id: %s", uml_class.name, entity_id)
        return entity_id

    def _call(
        self, step: WorkflowState, tool_name: str, arguments: Dict[str, Any], request_id: RequestId
    ) -> Outcome:
        request = build_tool_call(tool_name, arguments, request_id)
        try:
            raw = self.transport.send(request.to_payload())
        except TransportFailure as exc:
            raise TransportFailure(step.value, exc.message, exc.payload, retryable=exc.retryable) from exc
        outcome = interpret(raw)
        self.history.append(StepRecord(step, tool_name, request_id, outcome))
        return outcome

    def _cleanup(self, step: WorkflowState, diagram_id: str, request_id: RequestId, label: str) -> None:
        outcome = self._call(step, "delete_diagram", {"diagramId": diagram_id}, request_id)
        if isinstance(outcome, ServerError):
            logger.warning("Failed to delete %s: %s", label, outcome.error)
        elif isinstance(outcome, Malformed):
            if not outcome.decoded:
                logger.error("Undecodable response deleting %s: %s", label, outcome.reason)
                raise MalformedResponse(step.value, outcome.reason, outcome.payload)
            logger.warning("Unexpected response deleting %s: %s", label, outcome.reason)
        else:
            logger.info("%s deleted", label.capitalize())

    def _call_required(
        self, step: WorkflowState, tool_name: str, arguments: Dict[str, Any], request_id: RequestId
    ) -> str:
        outcome = self._call(step, tool_name, arguments, request_id)
        if isinstance(outcome, ServerError):
            logger.error("Server error for %s: %s", tool_name, outcome.error)
            raise ServerErrorResponse(step.value, f"server returned error for {tool_name}", outcome.error)
        if isinstance(outcome, Malformed):
            logger.error("Malformed response for %s: %s", tool_name, outcome.reason)
            raise MalformedResponse(step.value, outcome.reason, outcome.payload)
        return outcome.text

    def _require_id(self, step: WorkflowState, text: str, pattern: IdPattern) -> str:
        identifier = extract_identifier(text, pattern)
        if identifier is None:
            logger.error("No %s id in response text: %s", pattern.value, text)
            raise MissingIdentifier(step.value, f"failed to extract {pattern.value} id from text", text)
        return identifier

    def _require_context(self, step: WorkflowState, context: WorkflowContext, name: str) -> str:
        value = getattr(context, name)
        if not value:
            raise MissingIdentifier(step.value, f"{name} has not been captured", context)
        return value
