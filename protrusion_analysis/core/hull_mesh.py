"""
Hull mesh assembly: triangles plus a deduplicated wireframe
"""

from ..utils.logger import LogMixin
from .data_models import HullFace, MeshEdge, MeshGeometry, MeshTriangle

DEFAULT_FACE_COLOR = "blue"
DEFAULT_EDGE_COLOR = "black"


def canonical_edge(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


class HullMeshAssembler(LogMixin):
    """
    Turns hull faces into a renderable mesh.

    Group ids ``0..face_count-1`` are triangles; edges follow from
    ``face_count`` upward in first-encountered order. ``group_label`` and
    ``group_color`` answer for any id once ``assemble`` has run.
    """

    def __init__(
        self,
        face_color: str = DEFAULT_FACE_COLOR,
        edge_color: str = DEFAULT_EDGE_COLOR,
    ):
        self.face_color = face_color
        self.edge_color = edge_color
        self.face_count = 0

    @classmethod
    def for_mesh(
        cls,
        mesh: MeshGeometry,
        face_color: str = DEFAULT_FACE_COLOR,
        edge_color: str = DEFAULT_EDGE_COLOR,
    ) -> "HullMeshAssembler":
        """Labeling/coloring callbacks for an already assembled mesh"""
        assembler = cls(face_color=face_color, edge_color=edge_color)
        assembler.face_count = mesh.face_count
        return assembler

    def assemble(self, points, hull_faces: list[HullFace]) -> MeshGeometry:
        """
        Args:
            points: Hull input points (indexed by the faces)
            hull_faces: Triangular faces

        Returns:
            MeshGeometry: One triangle per face and every edge once
        """
        n_points = len(points)
        triangles = []
        edge_keys: dict[tuple[int, int], int] = {}
        face_count = len(hull_faces)

        for group_id, face in enumerate(hull_faces):
            a, b, c = (int(i) for i in face)
            for i in (a, b, c):
                if not 0 <= i < n_points:
                    raise ValueError(f"Face {group_id} index {i} out of range")
            triangles.append(MeshTriangle(group_id=group_id, vertices=(a, b, c)))

            for key in (canonical_edge(a, b), canonical_edge(a, c), canonical_edge(b, c)):
                if key not in edge_keys:
                    edge_keys[key] = face_count + len(edge_keys)

        edges = [
            MeshEdge(group_id=group_id, start=start, end=end)
            for (start, end), group_id in edge_keys.items()
        ]

        self.face_count = face_count
        self.logger.debug(f"Hull mesh: {face_count} triangles, {len(edges)} edges")
        return MeshGeometry(triangles=triangles, edges=edges)

    def group_label(self, group_id: int) -> str:
        if group_id < self.face_count:
            return f"face {group_id}"
        return f"edge {group_id}"

    def group_color(self, group_id: int) -> str:
        if group_id < self.face_count:
            return self.face_color
        return self.edge_color
