"""
Algorithm module
"""

from .method_factory import MethodFactory
from .protrusion_pipeline import ProtrusionPipeline
from .visual_groups import (
    VisualGroup,
    SphereGroup,
    HullMeshVisual,
    build_sphere_groups,
    build_hull_visual,
)

__all__ = [
    "MethodFactory",
    "ProtrusionPipeline",
    "VisualGroup",
    "SphereGroup",
    "HullMeshVisual",
    "build_sphere_groups",
    "build_hull_visual",
]
