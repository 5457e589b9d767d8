"""
Convex hull construction over selected atom coordinates
"""

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from ..utils.logger import LogMixin
from .data_models import HullFace
from .exceptions import DegenerateGeometryError

# Point-to-plane tolerance (Å)
HULL_EPSILON = 1e-5


def as_point_array(points) -> np.ndarray:
    """Coerce a sequence of (x, y, z) triples to an (n, 3) float array"""
    pts = np.asarray(points, dtype=float)
    if pts.size == 0:
        return np.empty((0, 3), dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"points shape must be (n, 3), got: {pts.shape}")
    return pts


def hull_vertex_set(faces) -> set[int]:
    """Distinct point indices appearing in any face"""
    return {int(i) for face in faces for i in face}


def face_planes(points, faces) -> tuple[np.ndarray, np.ndarray]:
    """
    Outward unit normals and offsets of each face plane

    Args:
        points: Hull input points, shape (n, 3)
        faces: Triangles as index triples

    Returns:
        (normals, offsets): one row per face of nonzero area, such that
            ``normals @ p + offsets <= 0`` for points inside the hull
    """
    pts = as_point_array(points)
    if len(faces) == 0:
        return np.empty((0, 3), dtype=float), np.empty(0, dtype=float)

    tri = pts[np.asarray(faces, dtype=int)]
    normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
    lengths = np.linalg.norm(normals, axis=1)

    # Zero-area triangles bound nothing and have no plane
    keep = lengths > 0
    tri = tri[keep]
    normals = normals[keep] / lengths[keep][:, None]

    # Winding is arbitrary; orient every normal away from the interior
    interior = pts[sorted(hull_vertex_set(faces))].mean(axis=0)
    flip = np.einsum("ij,ij->i", normals, interior - tri[:, 0]) > 0
    normals[flip] *= -1.0

    offsets = -np.einsum("ij,ij->i", normals, tri[:, 0])
    return normals, offsets


def points_inside(points, faces, eps: float = HULL_EPSILON) -> np.ndarray:
    """Boolean mask of points lying on the interior side of every face plane"""
    pts = as_point_array(points)
    normals, offsets = face_planes(pts, faces)
    if len(normals) == 0:
        return np.zeros(len(pts), dtype=bool)
    signed = pts @ normals.T + offsets[None, :]
    return np.all(signed <= eps, axis=1)


class ConvexHullBuilder(LogMixin):
    """
    3D convex hull of a point set. Qhull (quickhull) does the construction;
    this class screens out degenerate inputs and returns triangular faces as
    index triples into the input sequence.
    """

    def build(self, points) -> list[HullFace]:
        """
        Args:
            points: Sequence of (x, y, z) in AtomSelector order

        Returns:
            list[HullFace]: Triangular faces, winding order not guaranteed
        """
        pts = as_point_array(points)
        self._check_degenerate(pts)

        try:
            hull = ConvexHull(pts)
        except QhullError as e:
            raise DegenerateGeometryError(str(e).splitlines()[0]) from e

        faces = [tuple(int(i) for i in simplex) for simplex in hull.simplices]
        self.logger.debug(
            f"Convex hull: {len(faces)} faces, {len(hull.vertices)} vertices "
            f"from {len(pts)} points"
        )
        return faces

    @staticmethod
    def _check_degenerate(pts: np.ndarray) -> None:
        if len(pts) < 4:
            raise DegenerateGeometryError(f"{len(pts)} points, at least 4 required")
        if not np.all(np.isfinite(pts)):
            raise DegenerateGeometryError("non-finite coordinates")

        # Thickness along the weakest principal axis
        centered = pts - pts.mean(axis=0)
        _, _, vt = np.linalg.svd(centered, full_matrices=False)
        thickness = np.ptp(centered @ vt[-1])
        if thickness <= HULL_EPSILON:
            raise DegenerateGeometryError("points are coplanar or collinear")
