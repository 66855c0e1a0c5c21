from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictFloat

from dagbuilder.graph.graph_schema import Edge, GraphSnapshot, Node


class PositionModel(BaseModel):
    x: StrictFloat = Field(allow_inf_nan=False)
    y: StrictFloat = Field(allow_inf_nan=False)


class GraphNode(BaseModel):
    id: str
    label: str
    position: PositionModel

    @classmethod
    def from_node(cls, node: Node) -> "GraphNode":
        return cls(
            id=node.id,
            label=node.label,
            position=PositionModel(x=node.position.x, y=node.position.y),
        )


class GraphEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")

    @classmethod
    def from_edge(cls, edge: Edge) -> "GraphEdge":
        return cls(source=edge.source, target=edge.target)


class GraphResponse(BaseModel):
    nodes: List[GraphNode]
    edges: List[GraphEdge]

    @classmethod
    def from_snapshot(cls, snapshot: GraphSnapshot) -> "GraphResponse":
        return cls(
            nodes=[GraphNode.from_node(n) for n in snapshot.nodes],
            edges=[GraphEdge.from_edge(e) for e in snapshot.edges],
        )


class GraphStatsResponse(BaseModel):
    nodes: int
    edges: int
    roots: int
    leaves: int
    longest_path: int


class TopologyResponse(BaseModel):
    order: List[str]
    roots: List[str]
    leaves: List[str]


class CreateNodeRequest(BaseModel):
    label: str
    position: Optional[PositionModel] = None


class CreateEdgeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")


class ErrorResponse(BaseModel):
    error: str
    detail: str
