from typing import List, Dict, Any, Optional
from pydantic import BaseModel


class GraphNode(BaseModel):
    id: str
    node_type: str
    label: str
    data: Any = None


class GraphEdge(BaseModel):
    source: str
    target: str
    relationship: str


class GraphPayload(BaseModel):
    id: Optional[str] = None
    name: str
    root: Optional[str] = None
    vocabulary: str = "base"
    composition_type: Optional[Dict[str, str]] = None
    metadata: Dict[str, Any] = {}
    nodes: List[GraphNode]
    edges: List[GraphEdge] = []


class ComposeRequest(BaseModel):
    left: GraphPayload
    right: GraphPayload
    relationship: Optional[str] = None


class RelabelRequest(BaseModel):
    graph: GraphPayload
    prefix: str


class AnalysisResponse(BaseModel):
    nodes: int
    edges: int
    roots: List[str]
    leaves: List[str]
    preorder: List[str]
    relationships: Dict[str, int]


class ValidationResponse(BaseModel):
    acyclic: bool
    cycle: List[str]
