"""
Parallel computation components
Thread-level parallel KDTree radius queries
"""

import concurrent.futures

import numpy as np
from scipy.spatial import KDTree


class ParallelKDTreeQuery:
    """
    Parallel KDTree query

    Splits radius queries for many points across worker threads after the
    KDTree is built. The tree is read-only once constructed, so concurrent
    queries are safe.
    """

    def __init__(self, tree: KDTree, num_workers: int = 1):
        """
        Args:
            tree: Constructed KDTree object
            num_workers: Number of parallel worker threads, default 1 (serial)
        """
        self.tree = tree
        self.num_workers = num_workers

    def query_ball_point_parallel(
        self, points: np.ndarray, radius: float
    ) -> list[list[int]]:
        """
        Parallel radius query

        Args:
            points: Query point array, shape (n_points, 3)
            radius: Query radius

        Returns:
            Neighbor index list for each query point, in query order
        """
        if self.num_workers <= 1:
            return [self.tree.query_ball_point(p, radius) for p in points]

        n_points = len(points)
        results: list[list[int]] = [[] for _ in range(n_points)]
        chunk_size = max(1, -(-n_points // self.num_workers))

        def process_chunk(start: int, end: int):
            return start, [self.tree.query_ball_point(p, radius) for p in points[start:end]]

        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self.num_workers, thread_name_prefix="kdtree_worker"
        ) as executor:
            futures = [
                executor.submit(process_chunk, start, min(start + chunk_size, n_points))
                for start in range(0, n_points, chunk_size)
            ]

            for future in concurrent.futures.as_completed(futures):
                start, neighbor_lists = future.result()
                results[start : start + len(neighbor_lists)] = neighbor_lists

        return results
