from fastapi import APIRouter, Depends, Request, Response, status

from backend.app.api.schemas import (
    CreateEdgeRequest,
    CreateNodeRequest,
    GraphEdge,
    GraphNode,
    GraphResponse,
    GraphStatsResponse,
    PositionModel,
    TopologyResponse,
)
from backend.app.config import AppConfig
from backend.app.dependencies import get_config, get_graph_store
from dagbuilder.graph.graph_query import GraphQueryEngine
from dagbuilder.graph.graph_store import GraphStore

router = APIRouter()


# -------------------- Whole graph --------------------


@router.get("/", response_model=GraphResponse)
def graph_snapshot(store: GraphStore = Depends(get_graph_store)):
    return GraphResponse.from_snapshot(store.snapshot())


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def graph_clear(store: GraphStore = Depends(get_graph_store)):
    store.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stats", response_model=GraphStatsResponse)
def graph_stats(store: GraphStore = Depends(get_graph_store)):
    stats = GraphQueryEngine(store.snapshot()).stats()
    return GraphStatsResponse(
        nodes=stats.nodes,
        edges=stats.edges,
        roots=stats.roots,
        leaves=stats.leaves,
        longest_path=stats.longest_path,
    )


@router.get("/topology", response_model=TopologyResponse)
def graph_topology(store: GraphStore = Depends(get_graph_store)):
    engine = GraphQueryEngine(store.snapshot())
    return TopologyResponse(
        order=engine.topological_order(),
        roots=engine.roots(),
        leaves=engine.leaves(),
    )


@router.get("/export")
def graph_export(
    store: GraphStore = Depends(get_graph_store),
    config: AppConfig = Depends(get_config),
):
    codec = config.dagbuilder.codec
    return Response(
        content=store.export_snapshot(indent=codec.indent),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{codec.export_filename}"'
        },
    )


@router.post("/import", response_model=GraphResponse)
async def graph_import(
    request: Request,
    store: GraphStore = Depends(get_graph_store),
):
    body = await request.body()
    store.import_snapshot(body)
    return GraphResponse.from_snapshot(store.snapshot())


# -------------------- Nodes --------------------


@router.post(
    "/nodes",
    response_model=GraphNode,
    status_code=status.HTTP_201_CREATED,
)
def node_create(
    payload: CreateNodeRequest,
    store: GraphStore = Depends(get_graph_store),
):
    position = None
    if payload.position is not None:
        position = (payload.position.x, payload.position.y)
    node_id = store.add_node(payload.label, position)
    return GraphNode.from_node(store.get_node(node_id))


@router.put("/nodes/{node_id}/position", response_model=GraphNode)
def node_reposition(
    node_id: str,
    payload: PositionModel,
    store: GraphStore = Depends(get_graph_store),
):
    node = store.reposition_node(node_id, (payload.x, payload.y))
    return GraphNode.from_node(node)


@router.delete("/nodes/{node_id}", status_code=status.HTTP_204_NO_CONTENT)
def node_delete(node_id: str, store: GraphStore = Depends(get_graph_store)):
    store.delete_node(node_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -------------------- Edges --------------------


@router.post(
    "/edges",
    response_model=GraphEdge,
    status_code=status.HTTP_201_CREATED,
)
def edge_create(
    payload: CreateEdgeRequest,
    store: GraphStore = Depends(get_graph_store),
):
    edge = store.add_edge(payload.source, payload.target)
    return GraphEdge.from_edge(edge)


@router.delete(
    "/edges/{source}/{target}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def edge_delete(
    source: str,
    target: str,
    store: GraphStore = Depends(get_graph_store),
):
    store.delete_edge(source, target)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
