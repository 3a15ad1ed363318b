"""UML payload models and the two sample classes."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Visibility = Literal["public", "private", "protected", "package"]


class Position(BaseModel):
    x: float = 100.0
    y: float = 100.0


class UmlAttribute(BaseModel):
    name: str
    type: str
    visibility: Visibility = "private"


class UmlParameter(BaseModel):
    name: str
    type: str


class UmlMethod(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    return_type: str = Field("void", alias="returnType")
    visibility: Visibility = "public"
    parameters: Optional[List[UmlParameter]] = None


class UmlClass(BaseModel):
    name: str
    attributes: List[UmlAttribute] = Field(default_factory=list)
    methods: List[UmlMethod] = Field(default_factory=list)
    position: Position = Field(default_factory=Position)

    def to_arguments(self, diagram_id: str) -> Dict[str, Any]:
        """Arguments for the ``add_uml_class`` tool."""
        return {
            "diagramId": diagram_id,
            **self.model_dump(by_alias=True, exclude_none=True),
        }


class UmlEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_id: str = Field(..., alias="sourceId")
    target_id: str = Field(..., alias="targetId")
    edge_type: str = Field("association", alias="edgeType")
    label: Optional[str] = None

    def to_arguments(self, diagram_id: str) -> Dict[str, Any]:
        """Arguments for the ``create_edge`` tool."""
        return {
            "diagramId": diagram_id,
            **self.model_dump(by_alias=True, exclude_none=True),
        }


def person_class() -> UmlClass:
    return UmlClass(
        name="Person",
        attributes=[
            UmlAttribute(name="id", type="int"),
            UmlAttribute(name="name", type="String"),
            UmlAttribute(name="age", type="int"),
            UmlAttribute(name="email", type="String"),
        ],
        methods=[
            UmlMethod(name="getName", return_type="String"),
            UmlMethod(name="setAge", return_type="void", parameters=[UmlParameter(name="age", type="int")]),
            UmlMethod(name="getEmail", return_type="String"),
        ],
        position=Position(x=100.0, y=100.0),
    )


def car_class() -> UmlClass:
    return UmlClass(
        name="Car",
        attributes=[
            UmlAttribute(name="model", type="String"),
            UmlAttribute(name="year", type="int"),
            UmlAttribute(name="color", type="String"),
        ],
        methods=[
            UmlMethod(name="getModel", return_type="String"),
            UmlMethod(name="setYear", return_type="void", parameters=[UmlParameter(name="year", type="int")]),
        ],
        position=Position(x=350.0, y=100.0),
    )
