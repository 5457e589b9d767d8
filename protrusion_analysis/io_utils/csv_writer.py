import csv
from pathlib import Path

from ..core.data_models import ProtrusionResult, MeshGeometry

ATOM_HEADER = ["group", "chain", "resnum", "resname", "atom", "atom_id", "x", "y", "z"]

RESULT_GROUPS = (
    "all_atoms",
    "hydrophobic_atoms",
    "protruding_atoms",
    "hydrophobic_protruding_atoms",
)


class CSVWriter:
    @staticmethod
    def write_atoms(
        filepath: str | Path,
        result: ProtrusionResult,
        groups: tuple[str, ...] = RESULT_GROUPS,
        include_header: bool = True,
    ) -> None:
        """One row per atom per requested result group"""
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)

            if include_header:
                writer.writerow(ATOM_HEADER)

            for group in groups:
                for atom in getattr(result, group):
                    x, y, z = atom.coordinate
                    writer.writerow(
                        [
                            group,
                            atom.chain_id,
                            atom.residue_number,
                            atom.residue_name,
                            atom.name,
                            atom.id,
                            f"{x:.3f}",
                            f"{y:.3f}",
                            f"{z:.3f}",
                        ]
                    )

    @staticmethod
    def write_mesh(filepath: str | Path, mesh: MeshGeometry) -> None:
        """Triangles and edges as ``kind, group_id, i, j[, k]`` rows"""
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["kind", "group_id", "i", "j", "k"])
            for tri in mesh.triangles:
                writer.writerow(["face", tri.group_id, *tri.vertices])
            for edge in mesh.edges:
                writer.writerow(["edge", edge.group_id, edge.start, edge.end, ""])
