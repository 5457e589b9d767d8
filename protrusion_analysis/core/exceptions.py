"""
Protrusion analysis errors
"""


class ProtrusionAnalysisError(Exception):
    """Base class for errors raised by the analysis pipeline."""


class MissingGeometryError(ProtrusionAnalysisError):
    """
    The structure lacks per-atom coordinates needed for selection.
    """

    def __init__(self, atom_label: str = ""):
        self.atom_label = atom_label
        if atom_label:
            message = f"Atom {atom_label} has no usable (x, y, z) coordinate"
        else:
            message = "Structure is missing per-atom coordinates"
        super().__init__(message)


class DegenerateGeometryError(ProtrusionAnalysisError):
    """
    Convex hull cannot be built: fewer than 4 points, or all points are
    coplanar/collinear.
    """

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "Insufficient geometry for protrusion analysis"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StructureParseError(ProtrusionAnalysisError):
    """
    A structure file exists but the parser could not build a structure from it.
    """

    def __init__(self, path: str = "", reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Could not parse structure file {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
