"""
Render-ready descriptions of protrusion results

Produces plain data for a rendering layer: four sphere groups and the hull
mesh with its labeling/coloring callbacks. Nothing here draws anything.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np

from ..core.data_models import AtomRecord, MeshGeometry, ProtrusionReport
from ..core.hull_mesh import HullMeshAssembler

SMALL_SPHERE_RADIUS = 0.5
LARGE_SPHERE_RADIUS = 2.0
NORMAL_COLOR = "gray"
HYDROPHOBIC_COLOR = "orange"


class VisualGroup(str, Enum):
    """State references of the protrusion visuals"""

    HYDRO_CA_CB = "hydro-ca-cb"
    NORMAL_CA_CB = "normal-ca-cb"
    HYDRO_PROTRUSION = "hydro-protrusion"
    NORMAL_PROTRUSION = "normal-protrusion"
    CONVEX_HULL = "convex-hull"

    @property
    def label(self) -> str:
        return VISUAL_LABELS[self]


VISUAL_LABELS = {
    VisualGroup.HYDRO_CA_CB: "Hydrophobic Ca Cb atoms",
    VisualGroup.NORMAL_CA_CB: "Ca Cb atoms",
    VisualGroup.HYDRO_PROTRUSION: "Hydrophobic protrusions",
    VisualGroup.NORMAL_PROTRUSION: "Protrusions",
    VisualGroup.CONVEX_HULL: "Convex hull",
}


@dataclass
class SphereGroup:
    """One set of same-sized, same-colored spheres"""

    ref: VisualGroup
    centers: np.ndarray  # shape (n, 3)
    center_labels: list[str]
    radius: float
    color: str

    @property
    def label(self) -> str:
        return self.ref.label

    @property
    def count(self) -> int:
        return len(self.centers)


@dataclass
class HullMeshVisual:
    """Hull mesh plus its display parameters"""

    mesh: MeshGeometry
    points: np.ndarray
    assembler: HullMeshAssembler
    opacity: float = 0.7
    ref: VisualGroup = field(default=VisualGroup.CONVEX_HULL)

    def __post_init__(self):
        if not 0 <= self.opacity <= 1:
            raise ValueError(f"opacity must be between 0 and 1: {self.opacity}")

    def with_opacity(self, opacity: float) -> "HullMeshVisual":
        """Restyled copy; the mesh itself is not recomputed"""
        return replace(self, opacity=opacity)

    def group_label(self, group_id: int) -> str:
        return self.assembler.group_label(group_id)

    def group_color(self, group_id: int) -> str:
        return self.assembler.group_color(group_id)


def _sphere_group(
    ref: VisualGroup, atoms: list[AtomRecord], radius: float, color: str
) -> SphereGroup:
    if atoms:
        centers = np.array([a.coordinate for a in atoms], dtype=float)
    else:
        centers = np.empty((0, 3), dtype=float)
    return SphereGroup(
        ref=ref,
        centers=centers,
        center_labels=[a.label for a in atoms],
        radius=radius,
        color=color,
    )


def build_sphere_groups(report: ProtrusionReport) -> list[SphereGroup]:
    """
    Sphere groups in the order they should be issued to the renderer.

    Co-located spheres of equal radius: the one drawn last covers the
    earlier one, so each hydrophobic group is issued after its normal
    counterpart.
    """
    result = report.result
    return [
        _sphere_group(
            VisualGroup.NORMAL_CA_CB,
            result.all_atoms,
            SMALL_SPHERE_RADIUS,
            NORMAL_COLOR,
        ),
        _sphere_group(
            VisualGroup.HYDRO_CA_CB,
            result.hydrophobic_atoms,
            SMALL_SPHERE_RADIUS,
            HYDROPHOBIC_COLOR,
        ),
        _sphere_group(
            VisualGroup.NORMAL_PROTRUSION,
            result.protruding_atoms,
            LARGE_SPHERE_RADIUS,
            NORMAL_COLOR,
        ),
        _sphere_group(
            VisualGroup.HYDRO_PROTRUSION,
            result.hydrophobic_protruding_atoms,
            LARGE_SPHERE_RADIUS,
            HYDROPHOBIC_COLOR,
        ),
    ]


def build_hull_visual(
    report: ProtrusionReport,
    face_color: str | None = None,
    edge_color: str | None = None,
    opacity: float | None = None,
) -> HullMeshVisual:
    """Hull visual styled as configured for the run unless overridden"""
    face_color = report.face_color if face_color is None else face_color
    edge_color = report.edge_color if edge_color is None else edge_color
    opacity = report.opacity if opacity is None else opacity
    return HullMeshVisual(
        mesh=report.mesh,
        points=report.points,
        assembler=HullMeshAssembler.for_mesh(report.mesh, face_color, edge_color),
        opacity=opacity,
    )
