"""
Neighbor counter interface definitions
"""

from abc import ABC, abstractmethod

import numpy as np
from scipy.spatial import KDTree

from .parallel import ParallelKDTreeQuery


class NeighborCounter(ABC):
    """Neighbor counter abstract base class"""

    @abstractmethod
    def count_neighbors(
        self,
        coords: np.ndarray,
        query_indices: list[int],
        cutoff: float,
    ) -> np.ndarray:
        """
        Count, for each query atom, the other atoms strictly closer than cutoff

        Args:
            coords: All atom coordinates, shape (n_atoms, 3)
            query_indices: Indices into coords of the atoms to count around
            cutoff: Distance cutoff (Å), compared with strict ``<``

        Returns:
            np.ndarray: Neighbor count array, shape (len(query_indices),)
        """
        pass


class BruteForceNeighborCounter(NeighborCounter):
    """
    Chunked pairwise distance counter
    O(n_query * n_atoms), chunked over atoms to bound memory usage
    """

    def __init__(self, chunk_size: int = 5000):
        """
        Args:
            chunk_size: Chunk size
        """
        self.chunk_size = chunk_size

    def count_neighbors(
        self,
        coords: np.ndarray,
        query_indices: list[int],
        cutoff: float,
    ) -> np.ndarray:
        query_indices = np.asarray(query_indices, dtype=int)
        if len(query_indices) == 0:
            return np.zeros(0, dtype=int)

        query_coords = coords[query_indices]
        cutoff2 = cutoff * cutoff
        counts = np.zeros(len(query_indices), dtype=int)
        n_atoms = len(coords)

        for start in range(0, n_atoms, self.chunk_size):
            end = min(start + self.chunk_size, n_atoms)
            diff = query_coords[:, None, :] - coords[None, start:end, :]
            d2 = np.sum(diff * diff, axis=2)
            close = d2 < cutoff2

            # The atom itself is not its own neighbor
            in_chunk = (query_indices >= start) & (query_indices < end)
            rows = np.nonzero(in_chunk)[0]
            close[rows, query_indices[rows] - start] = False

            counts += np.sum(close, axis=1)

        return counts


class KDTreeNeighborCounter(NeighborCounter):
    """
    KDTree based neighbor counter

    ``query_ball_point`` includes points at exactly the cutoff, so candidates
    are re-checked with strict ``<`` to keep counts identical to the
    brute-force counter.
    """

    def __init__(self, num_processes: int = 1):
        """
        Args:
            num_processes: Number of parallel query threads, 1 indicates serial
        """
        self.num_processes = num_processes

    def count_neighbors(
        self,
        coords: np.ndarray,
        query_indices: list[int],
        cutoff: float,
    ) -> np.ndarray:
        query_indices = np.asarray(query_indices, dtype=int)
        if len(query_indices) == 0:
            return np.zeros(0, dtype=int)

        tree = KDTree(coords)
        query_coords = coords[query_indices]
        parallel_query = ParallelKDTreeQuery(tree, self.num_processes)
        # Slightly widened search radius; the exact test happens below
        neighbor_lists = parallel_query.query_ball_point_parallel(
            query_coords, cutoff * (1.0 + 1e-9)
        )

        cutoff2 = cutoff * cutoff
        counts = np.zeros(len(query_indices), dtype=int)
        for row, (i, neighbors) in enumerate(zip(query_indices, neighbor_lists)):
            candidates = np.asarray([j for j in neighbors if j != i], dtype=int)
            if len(candidates) == 0:
                continue
            diff = coords[candidates] - coords[i]
            counts[row] = int(np.sum(np.sum(diff * diff, axis=1) < cutoff2))

        return counts
