from pathlib import Path

from Bio.PDB import MMCIFParser, PDBParser  # type: ignore
from Bio.PDB.PDBExceptions import PDBConstructionException  # type: ignore

from ..core.exceptions import StructureParseError
from ..utils.validation import validate_structure_file


class StructureLoader:
    def __init__(self, quiet: bool = True):
        """
        Args:
            quiet: suspend BioPython warning
        """
        self.quiet = quiet

    def load(self, path: str | Path, structure_id: str | None = None):
        """
        Load a PDB or mmCIF file with Biopython

        Returns:
            Bio.PDB.Structure.Structure: the parsed structure

        Raises:
            FileNotFoundError: The file does not exist
            ValueError: Empty file or unrecognized extension
            StructureParseError: The parser rejected the file contents
        """
        fmt = validate_structure_file(path)
        structure_id = structure_id or Path(path).stem

        if fmt == "cif":
            parser = MMCIFParser(QUIET=self.quiet)
        else:
            parser = PDBParser(QUIET=self.quiet)

        try:
            return parser.get_structure(structure_id, str(path))
        except (PDBConstructionException, KeyError, IndexError, ValueError) as e:
            raise StructureParseError(str(path), f"{type(e).__name__}: {e}") from e


def load_structure(path: str | Path, quiet: bool = True):
    """
    Convenience wrapper around StructureLoader

    Args:
        path: Path to the structure file
        quiet: Whether to operate in silent mode

    Returns:
        Bio.PDB.Structure.Structure
    """
    return StructureLoader(quiet=quiet).load(path)
