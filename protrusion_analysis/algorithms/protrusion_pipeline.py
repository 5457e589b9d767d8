"""
Protrusion analysis pipeline
"""

from concurrent.futures import Executor, Future

from ..core.atom_selector import DEFAULT_QUERY, AtomSelector
from ..core.convex_hull import ConvexHullBuilder
from ..core.data_models import (
    AnalysisConfig,
    MeshGeometry,
    ProtrusionAnalysisState,
    ProtrusionReport,
    ProtrusionResult,
    SelectionQuery,
)
from ..core.hull_mesh import HullMeshAssembler
from ..core.protrusion_classifier import ProtrusionClassifier
from ..utils.logger import LogMixin
from .method_factory import MethodFactory


class ProtrusionPipeline(LogMixin):
    """
    Select -> hull -> classify -> assemble, once per call.

    Nothing is cached between runs; whether a structure was already analyzed
    is tracked by the caller through ProtrusionAnalysisState.
    """

    def __init__(self, config: AnalysisConfig | None = None):
        """
        Args:
            config: Analysis configuration
        """
        self.config = config or AnalysisConfig()
        self.config.validate()

        self.selector = AtomSelector()
        self.hull_builder = ConvexHullBuilder()
        self.classifier = ProtrusionClassifier(
            MethodFactory.create_counter(self.config.neighbor_method, self.config)
        )

    def run(self, structure, query: SelectionQuery = DEFAULT_QUERY) -> ProtrusionReport:
        """
        Run the full analysis

        Args:
            structure: Biopython Structure or Model
            query: Atom selection criteria

        Returns:
            ProtrusionReport: Selected atoms, hull faces, classification and mesh

        Raises:
            MissingGeometryError: An atom has no coordinates
            DegenerateGeometryError: Selected atoms cannot form a 3D hull
        """
        atoms = self.selector.select(structure, query)
        if not atoms:
            self.logger.info("No atoms selected, skipping hull construction")
            return self._report([], [], ProtrusionResult.empty(), MeshGeometry())

        points = [a.coordinate for a in atoms]
        faces = self.hull_builder.build(points)

        result = self.classifier.classify(
            atoms,
            faces,
            distance_cutoff=self.config.distance_cutoff,
            density_threshold=self.config.density_threshold,
            hydrophobic_set=self.config.hydrophobic_set,
        )
        mesh = HullMeshAssembler(
            face_color=self.config.hull_color, edge_color=self.config.edge_color
        ).assemble(points, faces)

        report = self._report(atoms, faces, result, mesh)
        self.logger.info(
            f"Selected {len(atoms)} atoms; convex hull: {len(faces)} faces, "
            f"{report.hull_vertex_count} vertices; protrusions: "
            f"{len(result.protruding_atoms)} "
            f"({len(result.hydrophobic_protruding_atoms)} hydrophobic)"
        )
        return report

    def _report(self, atoms, faces, result, mesh) -> ProtrusionReport:
        return ProtrusionReport(
            atoms=atoms,
            faces=faces,
            result=result,
            mesh=mesh,
            face_color=self.config.hull_color,
            edge_color=self.config.edge_color,
            opacity=self.config.hull_opacity,
        )

    def ensure_computed(
        self,
        state: ProtrusionAnalysisState,
        structure,
        query: SelectionQuery = DEFAULT_QUERY,
    ) -> ProtrusionAnalysisState:
        """Return state unchanged if computed, otherwise run and return the new state"""
        if state.is_computed:
            return state
        return ProtrusionAnalysisState.computed(self.run(structure, query))

    def submit(
        self,
        executor: Executor,
        structure,
        query: SelectionQuery = DEFAULT_QUERY,
    ) -> Future:
        """
        Schedule a run as one background unit of work.

        Cancelling the returned future abandons the whole computation if it
        has not started; a started run cannot be interrupted midway.
        """
        return executor.submit(self.run, structure, query)
