"""
Protrusion classifier
"""

from collections.abc import Iterable

import numpy as np

from ..utils.logger import LogMixin
from .convex_hull import hull_vertex_set
from .data_models import (
    DISTANCE_CUTOFF,
    HYDROPHOBICS,
    LOW_DENSITY_THRESHOLD,
    AtomRecord,
    HullFace,
    ProtrusionResult,
)
from .neighbor_counter import BruteForceNeighborCounter, NeighborCounter


class ProtrusionClassifier(LogMixin):
    """
    Splits selected atoms into normal/hydrophobic and protruding/non-protruding
    groups.

    A protrusion is a CB hull vertex with fewer than ``density_threshold``
    atoms (CA or CB) within ``distance_cutoff``.
    """

    def __init__(self, neighbor_counter: NeighborCounter | None = None):
        """
        Args:
            neighbor_counter: Neighbor counting strategy, brute force by default
        """
        self.neighbor_counter = neighbor_counter or BruteForceNeighborCounter()

    def classify(
        self,
        atoms: list[AtomRecord],
        hull_faces: list[HullFace],
        distance_cutoff: float = DISTANCE_CUTOFF,
        density_threshold: int = LOW_DENSITY_THRESHOLD,
        hydrophobic_set: Iterable[str] = HYDROPHOBICS,
    ) -> ProtrusionResult:
        """
        Classify atoms

        Args:
            atoms: Atoms the hull was built from, in selection order
            hull_faces: Hull faces indexing into atoms
            distance_cutoff: Neighbor radius (Å)
            density_threshold: Protrusion if neighbor count is below this
            hydrophobic_set: Hydrophobic residue names

        Returns:
            ProtrusionResult: Four atom groups; empty when there are no faces
        """
        if len(hull_faces) == 0:
            return ProtrusionResult.empty()

        hydrophobic_set = frozenset(r.upper() for r in hydrophobic_set)
        vertex_indices = hull_vertex_set(hull_faces)
        if max(vertex_indices) >= len(atoms):
            raise ValueError(
                f"Hull face index {max(vertex_indices)} out of range for {len(atoms)} atoms"
            )

        cb_vertices = sorted(i for i in vertex_indices if atoms[i].is_cb)
        coords = np.array([a.coordinate for a in atoms], dtype=float)
        neighbor_counts = self.neighbor_counter.count_neighbors(
            coords, cb_vertices, distance_cutoff
        )

        protruding = []
        hydrophobic_protruding = []
        for i, count in zip(cb_vertices, neighbor_counts):
            if count < density_threshold:
                protruding.append(atoms[i])
                if atoms[i].residue_name in hydrophobic_set:
                    hydrophobic_protruding.append(atoms[i])

        self.logger.debug(
            f"Hull vertices: {len(vertex_indices)}, CB vertices: {len(cb_vertices)}, "
            f"protrusions: {len(protruding)} "
            f"({len(hydrophobic_protruding)} hydrophobic)"
        )

        return ProtrusionResult(
            all_atoms=list(atoms),
            hydrophobic_atoms=[a for a in atoms if a.residue_name in hydrophobic_set],
            protruding_atoms=protruding,
            hydrophobic_protruding_atoms=hydrophobic_protruding,
        )
