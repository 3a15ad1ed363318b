from typing import Any, Dict, List

import pytest

from diagram_client.errors import (
    MalformedResponse,
    MissingIdentifier,
    ServerErrorResponse,
    TransportFailure,
)
from diagram_client.mcp.interpreter import Malformed, ServerError
from diagram_client.orchestrator.sample_workflow import (
    SampleUmlWorkflow,
    WorkflowContext,
    WorkflowState,
)
from diagram_client.utils.config import Settings


def ok(text: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": 1, "result": {"content": [{"type": "text", "text": text}]}}


def err(message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": message}}


class ScriptedTransport:
    """Replays canned responses and records every payload sent.

    Only ``send(payload)`` is exposed, like any plain JSON-RPC poster.
    """

    def __init__(self, responses: List[Any]) -> None:
        self._responses = list(responses)
        self.sent: List[Dict[str, Any]] = []

    def send(self, payload: Dict[str, Any]) -> Any:
        self.sent.append(payload)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def tool_calls(self, name: str) -> List[Dict[str, Any]]:
        return [p for p in self.sent if p["params"]["name"] == name]


HAPPY_PATH = [
    ok("Diagram deleted"),
    ok("Diagram deleted"),
    ok("Created diagram with ID: D1"),
    ok("Added UML class Person. ID: A1"),
    ok("Added UML class Car. ID: B1"),
    ok("Created edge with ID: E1"),
]


@pytest.fixture
def test_settings():
    return Settings(previous_diagram_id="0ld-1", empty_diagram_id="0ld-2")


def test_happy_path_threads_identifiers(test_settings):
    transport = ScriptedTransport(HAPPY_PATH)
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    context = workflow.run()

    assert context == WorkflowContext(diagram_id="D1", entity_a_id="A1", entity_b_id="B1")
    assert workflow.state is WorkflowState.DONE
    assert [p["params"]["name"] for p in transport.sent] == [
        "delete_diagram",
        "delete_diagram",
        "create_diagram",
        "add_uml_class",
        "add_uml_class",
        "create_edge",
    ]
    assert [p["id"] for p in transport.sent] == [0, 0.5, 1, 2, 3, 4]

    edge_args = transport.tool_calls("create_edge")[0]["params"]["arguments"]
    assert edge_args["sourceId"] == "A1"
    assert edge_args["targetId"] == "B1"
    assert edge_args["diagramId"] == "D1"
    assert edge_args["edgeType"] == "association"
    assert edge_args["label"] == "owns"


def test_cleanup_targets_configured_diagrams(test_settings):
    transport = ScriptedTransport(HAPPY_PATH)
    SampleUmlWorkflow(transport=transport, settings=test_settings).run()

    deletes = transport.tool_calls("delete_diagram")
    assert [d["params"]["arguments"] for d in deletes] == [{"diagramId": "0ld-1"}, {"diagramId": "0ld-2"}]


def test_class_steps_use_captured_diagram_id(test_settings):
    transport = ScriptedTransport(HAPPY_PATH)
    SampleUmlWorkflow(transport=transport, settings=test_settings).run()

    classes = [c["params"]["arguments"] for c in transport.tool_calls("add_uml_class")]
    assert [c["name"] for c in classes] == ["Person", "Car"]
    assert all(c["diagramId"] == "D1" for c in classes)
    assert classes[0]["position"] == {"x": 100.0, "y": 100.0}
    assert classes[1]["position"] == {"x": 350.0, "y": 100.0}


def test_cleanup_server_error_does_not_block(test_settings):
    responses = [err("Diagram not found"), {"jsonrpc": "2.0", "id": 0.5, "result": {}}] + HAPPY_PATH[2:]
    transport = ScriptedTransport(responses)
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    context = workflow.run()

    assert context.diagram_id == "D1"
    assert workflow.state is WorkflowState.DONE
    assert isinstance(workflow.history[0].outcome, ServerError)
    assert isinstance(workflow.history[1].outcome, Malformed)


def test_entity_a_server_error_fails_before_edge(test_settings):
    responses = HAPPY_PATH[:3] + [err("invalid class"), ok("ID: b1"), ok("edge")]
    transport = ScriptedTransport(responses)
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    with pytest.raises(ServerErrorResponse) as excinfo:
        workflow.run()

    assert excinfo.value.step == "CreateEntityA"
    assert excinfo.value.payload == {"code": -32000, "message": "invalid class"}
    assert workflow.state is WorkflowState.FAILED
    assert len(transport.tool_calls("create_edge")) == 0
    assert len(transport.tool_calls("add_uml_class")) == 1


def test_create_diagram_without_identifier_fails(test_settings):
    responses = HAPPY_PATH[:2] + [ok("Diagram created")]
    transport = ScriptedTransport(responses)
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    with pytest.raises(MissingIdentifier) as excinfo:
        workflow.run()

    assert excinfo.value.step == "CreateDiagram"
    assert excinfo.value.payload == "Diagram created"
    assert workflow.state is WorkflowState.FAILED
    assert len(transport.sent) == 3


def test_malformed_entity_response_fails(test_settings):
    responses = HAPPY_PATH[:4] + [{"result": {"content": []}}]
    transport = ScriptedTransport(responses)
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    with pytest.raises(MalformedResponse) as excinfo:
        workflow.run()

    assert excinfo.value.step == "CreateEntityB"
    assert workflow.state is WorkflowState.FAILED
    assert transport.tool_calls("create_edge") == []


def test_edge_server_error_fails(test_settings):
    responses = HAPPY_PATH[:5] + [err("unknown edge type")]
    workflow = SampleUmlWorkflow(transport=ScriptedTransport(responses), settings=test_settings)

    with pytest.raises(ServerErrorResponse) as excinfo:
        workflow.run()

    assert excinfo.value.step == "CreateEdge"
    assert workflow.state is WorkflowState.FAILED


def test_transport_failure_during_cleanup_is_fatal(test_settings):
    transport = ScriptedTransport([TransportFailure("CleanupPrevious", "connection refused", retryable=True)])
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    with pytest.raises(TransportFailure):
        workflow.run()

    assert workflow.state is WorkflowState.FAILED
    assert len(transport.sent) == 1


def test_edge_step_refuses_missing_endpoint(test_settings):
    transport = ScriptedTransport([])
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    with pytest.raises(MissingIdentifier) as excinfo:
        workflow.create_edge(WorkflowContext(diagram_id="d1", entity_a_id="a1"))

    assert "entity_b_id" in excinfo.value.message
    assert transport.sent == []


def test_steps_return_new_context(test_settings):
    transport = ScriptedTransport([ok("Created diagram with ID: D1")])
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)
    original = WorkflowContext()

    updated = workflow.create_diagram(original)

    assert original.diagram_id is None
    assert updated.diagram_id == "D1"


def test_skip_cleanup_starts_at_create_diagram(test_settings):
    transport = ScriptedTransport(HAPPY_PATH[2:])
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings, skip_cleanup=True)

    workflow.run()

    assert transport.tool_calls("delete_diagram") == []
    assert workflow.state is WorkflowState.DONE


def test_undecodable_cleanup_body_is_fatal(test_settings):
    transport = ScriptedTransport(["<html>502 Bad Gateway</html>"] + HAPPY_PATH[1:])
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    with pytest.raises(MalformedResponse) as excinfo:
        workflow.run()

    assert excinfo.value.step == "CleanupPrevious"
    assert excinfo.value.payload == "<html>502 Bad Gateway</html>"
    assert workflow.state is WorkflowState.FAILED
    assert len(transport.sent) == 1


def test_transport_failure_is_labelled_with_step(test_settings):
    failure = TransportFailure("request", "connection refused", retryable=True)
    transport = ScriptedTransport(HAPPY_PATH[:2] + [failure])
    workflow = SampleUmlWorkflow(transport=transport, settings=test_settings)

    with pytest.raises(TransportFailure) as excinfo:
        workflow.run()

    assert excinfo.value.step == "CreateDiagram"
    assert excinfo.value.retryable is True
    assert excinfo.value.__cause__ is failure
    assert workflow.state is WorkflowState.FAILED
