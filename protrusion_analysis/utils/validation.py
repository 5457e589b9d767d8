"""
Validation Utilities
"""

from pathlib import Path

from ..core.data_models import AnalysisConfig

PDB_SUFFIXES = (".pdb", ".ent")
MMCIF_SUFFIXES = (".cif", ".mmcif")


def validate_structure_file(filepath: str | Path) -> str:
    """
    Validates a structure file and reports its format.

    Args:
        filepath: Path to a PDB or mmCIF file.

    Returns:
        str: "pdb" or "cif".
    """
    path = Path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"Structure file not found: {filepath}")

    if path.stat().st_size == 0:
        raise ValueError(f"Structure file is empty: {filepath}")

    suffix = path.suffix.lower()
    if suffix in PDB_SUFFIXES:
        return "pdb"
    if suffix in MMCIF_SUFFIXES:
        return "cif"
    raise ValueError(
        f"File extension is not a recognized structure format "
        f"({', '.join(PDB_SUFFIXES + MMCIF_SUFFIXES)}): {filepath}"
    )


def validate_config(config: AnalysisConfig) -> bool:
    """
    Validates the analysis configuration.

    Args:
        config: Analysis configuration object.

    Returns:
        bool: True if the configuration is valid.
    """
    config.validate()
    return True


def validate_output_dir(directory: str | Path) -> Path:
    """
    Validates and prepares an output directory.

    Args:
        directory: Path to the output directory.

    Returns:
        Path: A validated, writable Path object for the directory.
    """
    path = Path(directory)

    if not path.exists():
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValueError(f"Failed to create output directory {directory}: {e}")

    if not path.is_dir():
        raise ValueError(f"Output path is not a directory: {directory}")

    # Simple write-permission test
    test_file = path / ".write_test"
    try:
        test_file.touch()
        test_file.unlink()
    except OSError as e:
        raise ValueError(f"Output directory is not writable {directory}: {e}")

    return path
