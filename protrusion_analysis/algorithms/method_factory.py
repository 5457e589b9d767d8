"""
Neighbor counting method factory
"""

from ..core.data_models import AnalysisConfig, NeighborMethod
from ..core.neighbor_counter import (
    BruteForceNeighborCounter,
    KDTreeNeighborCounter,
    NeighborCounter,
)


class MethodFactory:
    """Method factory"""

    @staticmethod
    def create_counter(
        method_type: NeighborMethod | str,
        config: AnalysisConfig | None = None,
    ) -> NeighborCounter:
        """
        Create neighbor counter

        Args:
            method_type: Method type (enum or string)
            config: Analysis configuration, defaults used when omitted

        Returns:
            NeighborCounter: Counter instance
        """
        if isinstance(method_type, str) and not isinstance(method_type, NeighborMethod):
            method_type = NeighborMethod(method_type.lower())

        config = config or AnalysisConfig()

        if method_type == NeighborMethod.BRUTE_FORCE:
            return BruteForceNeighborCounter(chunk_size=config.chunk_size)
        elif method_type == NeighborMethod.KDTREE:
            return KDTreeNeighborCounter(num_processes=config.num_processes)
        else:
            raise ValueError(f"Unknown method type: {method_type}")

    @staticmethod
    def get_available_methods() -> list:
        """Get available method list"""
        return [method.value for method in NeighborMethod]
