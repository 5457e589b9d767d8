"""
Core data model definitions
"""

from dataclasses import dataclass, field
from enum import Enum
import numpy as np

# Sentinel for "no filter" on a SelectionQuery field
ALL = None

DISTANCE_CUTOFF = 10.0  # 1 nm
LOW_DENSITY_THRESHOLD = 22
HYDROPHOBICS = ("LEU", "ILE", "PHE", "TYR", "TRP", "CYS", "MET")

HullFace = tuple[int, int, int]


class AtomNameFilter(str, Enum):
    """Which backbone proxy atoms a selection returns"""

    CA = "CA"
    CB = "CB"
    BOTH = "BOTH"


class NeighborMethod(str, Enum):
    """Neighbor counting method type"""

    BRUTE_FORCE = "brute_force"
    KDTREE = "kdtree"


@dataclass(frozen=True)
class AtomRecord:
    """A selected CA/CB atom"""

    id: int  # Index in the structure's atom traversal order
    name: str
    residue_name: str
    coordinate: tuple[float, float, float]
    label: str
    chain_id: str = ""
    residue_number: int = 0
    alt_loc: str = ""

    def __post_init__(self):
        """Data validation"""
        if not isinstance(self.id, int):
            raise ValueError(f"id must be an integer, got: {type(self.id)}")
        if not isinstance(self.name, str):
            raise ValueError(f"name must be a string, got: {type(self.name)}")
        if not isinstance(self.residue_name, str):
            raise ValueError(
                f"residue_name must be a string, got: {type(self.residue_name)}"
            )
        if len(self.coordinate) != 3:
            raise ValueError(
                f"coordinate must be a 3D point, got length: {len(self.coordinate)}"
            )

    @property
    def is_cb(self) -> bool:
        return self.name == "CB"


@dataclass(frozen=True)
class SelectionQuery:
    """
    Chain/residue/atom-name filter criteria.

    ``chains`` and ``residues`` are either ``ALL`` or a set of allowed values.
    An empty set is a valid filter that matches nothing.
    """

    chains: frozenset[str] | None = ALL
    residues: frozenset[str] | None = ALL
    atom_names: AtomNameFilter = AtomNameFilter.BOTH

    def __post_init__(self):
        # Accept any iterable of ids and normalize to frozensets
        if isinstance(self.chains, str) or isinstance(self.residues, str):
            raise ValueError("chains and residues must be collections, not strings")
        if self.chains is not ALL:
            object.__setattr__(self, "chains", frozenset(self.chains))
        if self.residues is not ALL:
            object.__setattr__(
                self, "residues", frozenset(r.upper() for r in self.residues)
            )
        if not isinstance(self.atom_names, AtomNameFilter):
            object.__setattr__(
                self, "atom_names", AtomNameFilter(str(self.atom_names).upper())
            )

    def is_empty(self) -> bool:
        """Whether an explicitly empty filter excludes everything"""
        return (self.chains is not ALL and len(self.chains) == 0) or (
            self.residues is not ALL and len(self.residues) == 0
        )

    def accepts_chain(self, chain_id: str) -> bool:
        return self.chains is ALL or chain_id in self.chains

    def accepts_residue(self, residue_name: str) -> bool:
        return self.residues is ALL or residue_name in self.residues

    def accepts_atom(self, atom_name: str) -> bool:
        if self.atom_names == AtomNameFilter.BOTH:
            return atom_name in ("CA", "CB")
        return atom_name == self.atom_names.value


@dataclass
class ProtrusionResult:
    """Protrusion classification result"""

    all_atoms: list[AtomRecord] = field(default_factory=list)
    hydrophobic_atoms: list[AtomRecord] = field(default_factory=list)
    protruding_atoms: list[AtomRecord] = field(default_factory=list)
    hydrophobic_protruding_atoms: list[AtomRecord] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ProtrusionResult":
        return cls()

    def is_empty(self) -> bool:
        """Whether all four groups are empty"""
        return not (
            self.all_atoms
            or self.hydrophobic_atoms
            or self.protruding_atoms
            or self.hydrophobic_protruding_atoms
        )

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary of atom ids per group"""
        return {
            "all_atoms": [a.id for a in self.all_atoms],
            "hydrophobic_atoms": [a.id for a in self.hydrophobic_atoms],
            "protruding_atoms": [a.id for a in self.protruding_atoms],
            "hydrophobic_protruding_atoms": [
                a.id for a in self.hydrophobic_protruding_atoms
            ],
        }


@dataclass(frozen=True)
class MeshTriangle:
    group_id: int
    vertices: HullFace


@dataclass(frozen=True)
class MeshEdge:
    group_id: int
    start: int
    end: int

    @property
    def key(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass
class MeshGeometry:
    """Hull triangles plus the deduplicated wireframe edges"""

    triangles: list[MeshTriangle] = field(default_factory=list)
    edges: list[MeshEdge] = field(default_factory=list)

    @property
    def face_count(self) -> int:
        return len(self.triangles)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def is_empty(self) -> bool:
        return not self.triangles and not self.edges

    def vertex_indices(self) -> set[int]:
        return {i for t in self.triangles for i in t.vertices}

    def euler_characteristic(self) -> int:
        """V - E + F, equal to 2 for a closed convex polyhedron"""
        return len(self.vertex_indices()) - self.edge_count + self.face_count

    def triangle_coordinates(self, points) -> np.ndarray:
        """Triangle corner coordinates, shape (n_faces, 3, 3)"""
        pts = np.asarray(points, dtype=float)
        if not self.triangles:
            return np.empty((0, 3, 3), dtype=float)
        return pts[np.array([t.vertices for t in self.triangles], dtype=int)]

    def edge_coordinates(self, points) -> np.ndarray:
        """Edge endpoint coordinates, shape (n_edges, 2, 3)"""
        pts = np.asarray(points, dtype=float)
        if not self.edges:
            return np.empty((0, 2, 3), dtype=float)
        return pts[np.array([e.key for e in self.edges], dtype=int)]


@dataclass
class ProtrusionReport:
    """Everything one pipeline run produced"""

    atoms: list[AtomRecord]
    faces: list[HullFace]
    result: ProtrusionResult
    mesh: MeshGeometry

    # Hull display style the run was configured with
    face_color: str = "blue"
    edge_color: str = "black"
    opacity: float = 0.7

    @property
    def points(self) -> np.ndarray:
        if not self.atoms:
            return np.empty((0, 3), dtype=float)
        return np.array([a.coordinate for a in self.atoms], dtype=float)

    @property
    def hull_vertex_count(self) -> int:
        return len({i for face in self.faces for i in face})


class ProtrusionAnalysisState:
    """
    Caller-owned record of whether protrusions were computed for a structure.

    Use ``ProtrusionAnalysisState.not_computed()`` or
    ``ProtrusionAnalysisState.computed(report)``.
    """

    __slots__ = ("_report",)

    def __init__(self, report: ProtrusionReport | None = None):
        self._report = report

    @classmethod
    def not_computed(cls) -> "ProtrusionAnalysisState":
        return cls(None)

    @classmethod
    def computed(cls, report: ProtrusionReport) -> "ProtrusionAnalysisState":
        if report is None:
            raise ValueError("A computed state requires a report")
        return cls(report)

    @property
    def is_computed(self) -> bool:
        return self._report is not None

    @property
    def report(self) -> ProtrusionReport:
        if self._report is None:
            raise ValueError("Protrusion analysis has not been computed")
        return self._report

    def __repr__(self) -> str:
        if self._report is None:
            return "ProtrusionAnalysisState(NotComputed)"
        return (
            "ProtrusionAnalysisState(Computed: "
            f"{len(self._report.result.protruding_atoms)} protrusions)"
        )


@dataclass
class AnalysisConfig:
    """Analysis configuration"""

    # Classification parameters
    distance_cutoff: float = DISTANCE_CUTOFF  # Neighbor counting radius (Å)
    density_threshold: int = LOW_DENSITY_THRESHOLD  # Protrusion if fewer neighbors
    hydrophobic_residues: tuple[str, ...] = HYDROPHOBICS

    # Computation parameters
    neighbor_method: NeighborMethod = NeighborMethod.BRUTE_FORCE
    chunk_size: int = 5000  # Chunk size for brute-force computation
    num_processes: int = 1  # Number of KDTree query threads

    # Hull display
    hull_color: str = "blue"
    edge_color: str = "black"
    hull_opacity: float = 0.7

    def validate(self):
        """Validate configuration parameters"""
        if self.distance_cutoff <= 0:
            raise ValueError(
                f"distance_cutoff must be greater than 0: {self.distance_cutoff}"
            )
        if not isinstance(self.density_threshold, int) or self.density_threshold <= 0:
            raise ValueError(
                f"density_threshold must be a positive integer: {self.density_threshold}"
            )
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be greater than 0: {self.chunk_size}")
        if self.num_processes <= 0:
            raise ValueError(f"num_processes must be greater than 0: {self.num_processes}")
        if not 0 <= self.hull_opacity <= 1:
            raise ValueError(
                f"hull_opacity must be between 0 and 1: {self.hull_opacity}"
            )
        NeighborMethod(self.neighbor_method)

        # Validate hydrophobic residue names
        for res in self.hydrophobic_residues:
            if not isinstance(res, str) or len(res) != 3:
                raise ValueError(f"Hydrophobic residue name must be a 3-letter code: {res}")

    @property
    def hydrophobic_set(self) -> frozenset[str]:
        return frozenset(r.upper() for r in self.hydrophobic_residues)
