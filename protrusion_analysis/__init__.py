__version__ = "1.0"

from .core.data_models import (
    ALL,
    AtomNameFilter,
    AtomRecord,
    SelectionQuery,
    ProtrusionResult,
    MeshGeometry,
    ProtrusionReport,
    ProtrusionAnalysisState,
    AnalysisConfig,
    NeighborMethod,
)
from .core.exceptions import (
    ProtrusionAnalysisError,
    MissingGeometryError,
    DegenerateGeometryError,
    StructureParseError,
)
from .core.atom_selector import AtomSelector
from .core.convex_hull import ConvexHullBuilder
from .core.protrusion_classifier import ProtrusionClassifier
from .core.hull_mesh import HullMeshAssembler
from .algorithms.protrusion_pipeline import ProtrusionPipeline

__all__ = [
    "ALL",
    "AtomNameFilter",
    "AtomRecord",
    "SelectionQuery",
    "ProtrusionResult",
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
    "ProtrusionPipeline",
]
