from fastapi import APIRouter, Depends

from graphcompose.composition.morphism import fmap
from graphcompose.config.settings import CompositionConfig
from graphcompose.graph.graph_query import GraphQueryEngine
from graphcompose.persistence import from_dict, to_dict
from graphcompose.validation import find_containment_cycle

from backend.app.api.schemas import (
    AnalysisResponse,
    GraphPayload,
    RelabelRequest,
    ValidationResponse,
)
from backend.app.dependencies import get_composition_config

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResponse)
def analyze_graph(
    payload: GraphPayload,
    config: CompositionConfig = Depends(get_composition_config),
):
    graph = from_dict(payload.model_dump(), config=config)
    engine = GraphQueryEngine(graph)

    return AnalysisResponse(
        nodes=graph.node_count(),
        edges=graph.edge_count(),
        roots=engine.roots(),
        leaves=engine.leaves(),
        preorder=[node.label for node in engine.preorder()],
        relationships=dict(engine.relationship_counts()),
    )


@router.post("/validate", response_model=ValidationResponse)
def validate_graph(
    payload: GraphPayload,
    config: CompositionConfig = Depends(get_composition_config),
):
    graph = from_dict(payload.model_dump(), config=config)
    cycle = find_containment_cycle(graph.store, graph.root)

    return ValidationResponse(
        acyclic=cycle is None,
        cycle=[str(n) for n in cycle or []],
    )


@router.post("/fmap/relabel", response_model=GraphPayload)
def relabel_graph(
    request: RelabelRequest,
    config: CompositionConfig = Depends(get_composition_config),
):
    graph = from_dict(request.graph.model_dump(), config=config)
    relabeled = fmap(graph, lambda node: node.with_label(f"{request.prefix}{node.label}"))
    return to_dict(relabeled)
