import sys
from pathlib import Path

import numpy as np
import pytest
from Bio.PDB.StructureBuilder import StructureBuilder

# Ensure the repository root is on sys.path so tests can import
# protrusion_analysis without an editable install.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from protrusion_analysis.core.data_models import AtomRecord  # noqa: E402

ISOLATED_POSITION = (40.0, 0.0, 0.0)


def build_structure(residues, structure_id="test"):
    """
    Build a Biopython structure.

    Args:
        residues: iterable of ``(chain_id, resname, resseq, atoms)`` or
            ``(chain_id, resname, resseq, atoms, hetflag)`` where atoms is a
            list of ``(name, coord)`` or ``(name, coord, altloc, occupancy)``
    """
    sb = StructureBuilder()
    sb.init_structure(structure_id)
    sb.init_model(0)
    current_chain = None
    for entry in residues:
        chain_id, resname, resseq, atoms = entry[:4]
        hetflag = entry[4] if len(entry) > 4 else " "
        if chain_id != current_chain:
            sb.init_chain(chain_id)
            sb.init_seg("    ")
            current_chain = chain_id
        sb.init_residue(resname, hetflag, resseq, " ")
        for atom in atoms:
            name, coord = atom[0], atom[1]
            altloc = atom[2] if len(atom) > 2 else " "
            occupancy = atom[3] if len(atom) > 3 else 1.0
            sb.init_atom(
                name,
                np.array(coord, dtype="f"),
                20.0,
                occupancy,
                altloc,
                f" {name:<3}",
                element=name[0],
            )
    return sb.get_structure()


def blob_residues(n_residues=30, radius=4.0, seed=7, chain_id="A"):
    """Residues with CA and CB packed inside a small sphere"""
    rng = np.random.default_rng(seed)
    names = ["ALA", "SER", "LEU", "GLU", "PHE", "LYS"]
    residues = []
    for k in range(n_residues):
        atoms = []
        for atom_name in ("CA", "CB"):
            while True:
                p = rng.uniform(-radius, radius, size=3)
                if np.linalg.norm(p) <= radius:
                    break
            atoms.append((atom_name, tuple(p)))
        residues.append((chain_id, names[k % len(names)], k + 1, atoms))
    return residues


def make_atoms(coords, names=None, resnames=None):
    """AtomRecords for classifier/mesh tests, ids equal to list position"""
    coords = np.asarray(coords, dtype=float)
    names = names or ["CB"] * len(coords)
    resnames = resnames or ["ALA"] * len(coords)
    return [
        AtomRecord(
            id=i,
            name=names[i],
            residue_name=resnames[i],
            coordinate=tuple(float(c) for c in coords[i]),
            label=f"A/{resnames[i]} {i + 1}/{names[i]}",
            chain_id="A",
            residue_number=i + 1,
        )
        for i in range(len(coords))
    ]


@pytest.fixture
def cube_points():
    return np.array(
        [[x, y, z] for x in (0.0, 1.0) for y in (0.0, 1.0) for z in (0.0, 1.0)]
    )


@pytest.fixture
def random_cloud():
    rng = np.random.default_rng(42)
    return rng.normal(scale=8.0, size=(200, 3))


@pytest.fixture
def blob_structure():
    """Dense CA/CB core plus one isolated LEU CB far outside the cutoff"""
    residues = blob_residues()
    residues.append(("A", "LEU", 100, [("CB", ISOLATED_POSITION)]))
    return build_structure(residues)


@pytest.fixture
def two_chain_structure():
    residues = blob_residues(n_residues=6, chain_id="A")
    residues += [
        (chain, resname, resseq + 10, atoms)
        for chain, resname, resseq, atoms in blob_residues(n_residues=6, seed=11, chain_id="B")
    ]
    return build_structure(residues)
