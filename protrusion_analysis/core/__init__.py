"""
Core data models and analysis components
"""

from .data_models import (
    ALL,
    AtomNameFilter,
    AtomRecord,
    SelectionQuery,
    HullFace,
    ProtrusionResult,
    MeshTriangle,
    MeshEdge,
    MeshGeometry,
    ProtrusionReport,
    ProtrusionAnalysisState,
    AnalysisConfig,
    NeighborMethod,
)
from .exceptions import (
    ProtrusionAnalysisError,
    MissingGeometryError,
    DegenerateGeometryError,
    StructureParseError,
)
from .atom_selector import AtomSelector
from .convex_hull import ConvexHullBuilder
from .protrusion_classifier import ProtrusionClassifier
from .hull_mesh import HullMeshAssembler

__all__ = [
    "ALL",
    "AtomNameFilter",
    "AtomRecord",
    "SelectionQuery",
    "HullFace",
    "ProtrusionResult",
    "MeshTriangle",
    "MeshEdge",
    "MeshGeometry",
    "ProtrusionReport",
    "ProtrusionAnalysisState",
    "AnalysisConfig",
    "NeighborMethod",
    "ProtrusionAnalysisError",
    "MissingGeometryError",
    "DegenerateGeometryError",
    "StructureParseError",
    "AtomSelector",
    "ConvexHullBuilder",
    "ProtrusionClassifier",
    "HullMeshAssembler",
]
