"""
CA/CB atom selection from a Biopython structure hierarchy
"""

import numpy as np

from ..utils.logger import LogMixin
from .data_models import ALL, AtomNameFilter, AtomRecord, SelectionQuery
from .exceptions import MissingGeometryError

PRIMARY_ALTLOCS = (" ", "", "A")

# Every CA and CB of every chain and residue
DEFAULT_QUERY = SelectionQuery(chains=ALL, residues=ALL, atom_names=AtomNameFilter.BOTH)


def atom_label(chain_id: str, residue, atom_name: str) -> str:
    """Display label, e.g. ``A/LEU 45/CB``"""
    _, resseq, icode = residue.get_id()
    resname = residue.get_resname().strip().upper()
    return f"{chain_id}/{resname} {resseq}{icode.strip()}/{atom_name}"


class AtomSelector(LogMixin):
    """
    Walks chain -> residue -> atom in the structure's native order and keeps
    the CA/CB atoms a SelectionQuery accepts.
    """

    def select(self, structure, query: SelectionQuery = DEFAULT_QUERY) -> list[AtomRecord]:
        """
        Select candidate atoms

        Args:
            structure: Biopython Structure (its first model is used) or Model
            query: Chain/residue/atom-name criteria

        Returns:
            list[AtomRecord]: Selected atoms; list position is the vertex index
                used by the hull and mesh stages
        """
        if query.is_empty():
            self.logger.debug("Empty chain or residue filter, nothing selected")
            return []

        model = self._first_model(structure)
        if model is None:
            return []

        records = []
        atom_index = 0
        for chain in model:
            chain_wanted = query.accepts_chain(chain.id)
            for residue in chain:
                n_atoms = len(residue)
                if not chain_wanted or not self._is_standard(residue):
                    atom_index += n_atoms
                    continue

                resname = residue.get_resname().strip().upper()
                if not query.accepts_residue(resname):
                    atom_index += n_atoms
                    continue

                for atom in residue:
                    index = atom_index
                    atom_index += 1

                    atom_name = atom.get_id().strip().upper()
                    if not query.accepts_atom(atom_name):
                        continue

                    conformer = self._resolve_conformer(atom, atom_name, query)
                    if conformer is None:
                        continue

                    records.append(
                        self._make_record(index, chain.id, residue, atom_name, conformer)
                    )

        self.logger.debug(f"Selected {len(records)} atoms ({query.atom_names.value})")
        return records

    @staticmethod
    def _first_model(structure):
        level = getattr(structure, "level", None)
        if level == "M":
            return structure
        if level == "S":
            return next(iter(structure), None)
        raise TypeError(
            f"Expected a Biopython Structure or Model, got: {type(structure).__name__}"
        )

    @staticmethod
    def _is_standard(residue) -> bool:
        # Hetero groups and waters carry a non-blank hetero flag
        return not residue.get_id()[0].strip()

    @staticmethod
    def _resolve_conformer(atom, atom_name: str, query: SelectionQuery):
        """
        Pick the conformer to report, or None to skip the atom.

        CA atoms keep the default conformer. CB atoms (when the query targets
        CB) are restricted to the primary alternate location so a residue
        contributes at most one CB.
        """
        if atom_name == "CA" or query.atom_names == AtomNameFilter.CA:
            return atom

        if atom.is_disordered() == 2:
            for altloc in PRIMARY_ALTLOCS:
                if altloc and atom.disordered_has_id(altloc):
                    return atom.disordered_get(altloc)
            return None

        if atom.get_altloc() in PRIMARY_ALTLOCS:
            return atom
        return None

    @staticmethod
    def _make_record(index: int, chain_id: str, residue, atom_name: str, atom) -> AtomRecord:
        label = atom_label(chain_id, residue, atom_name)
        coord = getattr(atom, "coord", None)
        if coord is None:
            raise MissingGeometryError(label)
        coord = np.asarray(coord, dtype=float)
        if coord.shape != (3,) or not np.all(np.isfinite(coord)):
            raise MissingGeometryError(label)

        return AtomRecord(
            id=index,
            name=atom_name,
            residue_name=residue.get_resname().strip().upper(),
            coordinate=(float(coord[0]), float(coord[1]), float(coord[2])),
            label=label,
            chain_id=chain_id,
            residue_number=int(residue.get_id()[1]),
            alt_loc=atom.get_altloc().strip(),
        )
