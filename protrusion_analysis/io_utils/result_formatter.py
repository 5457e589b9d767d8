from ..core.data_models import AtomRecord, ProtrusionReport, ProtrusionResult


class ResultFormatter:
    @staticmethod
    def atom_to_dict(atom: AtomRecord) -> dict[str, object]:
        return {
            "id": atom.id,
            "chain": atom.chain_id,
            "resnum": atom.residue_number,
            "resname": atom.residue_name,
            "atom": atom.name,
            "coordinate": list(atom.coordinate),
            "label": atom.label,
        }

    @staticmethod
    def to_dict_list(result: ProtrusionResult) -> list[dict[str, object]]:
        """Protruding atoms as dictionaries, flagged hydrophobic or not"""
        hydrophobic_ids = {a.id for a in result.hydrophobic_protruding_atoms}
        rows = []
        for atom in result.protruding_atoms:
            row = ResultFormatter.atom_to_dict(atom)
            row["hydrophobic"] = atom.id in hydrophobic_ids
            rows.append(row)
        return rows

    @staticmethod
    def format_summary(report: ProtrusionReport, name: str = "") -> str:
        result = report.result
        n_cb = sum(1 for a in report.atoms if a.is_cb)
        n_protruding = len(result.protruding_atoms)
        ratio = n_protruding / n_cb if n_cb > 0 else 0.0

        title = f"=== Protrusion Summary{': ' + name if name else ''} ==="
        summary = [
            title,
            f"Selected CA/CB atoms: {len(report.atoms)} ({n_cb} CB)",
            f"Convex hull: {len(report.faces)} faces, "
            f"{report.hull_vertex_count} vertices, {report.mesh.edge_count} edges",
            f"Hydrophobic CA/CB atoms: {len(result.hydrophobic_atoms)}",
            f"Protruding CB atoms: {n_protruding} ({ratio:.2%} of CB)",
            f"Hydrophobic protrusions: {len(result.hydrophobic_protruding_atoms)}",
        ]
        for atom in result.hydrophobic_protruding_atoms:
            summary.append(f"  {atom.label}")

        return "\n".join(summary)
