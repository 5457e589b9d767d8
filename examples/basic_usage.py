# Example

import sys
from pathlib import Path

# adding parent's path
sys.path.insert(0, str(Path(__file__).parent.parent))


def example_python_api(pdb_path):
    print("=== Python API Example ===")

    from protrusion_analysis import AnalysisConfig, ProtrusionPipeline, SelectionQuery
    from protrusion_analysis.io_utils import CSVWriter, ResultFormatter, load_structure

    config = AnalysisConfig(
        distance_cutoff=10.0,  # Neighbor counting radius (Å)
        density_threshold=22,  # Fewer neighbors than this means protrusion
    )

    if not Path(pdb_path).exists():
        print(f"⚠ PDB file doesn't exist: {pdb_path}")
        return None

    structure = load_structure(pdb_path)
    pipeline = ProtrusionPipeline(config)

    report = pipeline.run(structure, SelectionQuery(chains={"A"}))
    print(ResultFormatter.format_summary(report, Path(pdb_path).stem))

    output_file = "../output/example_protrusions.csv"
    CSVWriter.write_atoms(output_file, report.result)
    print(f"\nResult saved to: {output_file}")

    return report


def example_background(pdb_path):
    """Run the analysis off the calling thread and track it with a state value"""
    print("\n=== Background Run Example ===")

    from concurrent.futures import ThreadPoolExecutor

    from protrusion_analysis import ProtrusionAnalysisState, ProtrusionPipeline
    from protrusion_analysis.io_utils import load_structure

    if not Path(pdb_path).exists():
        return

    structure = load_structure(pdb_path)
    pipeline = ProtrusionPipeline()
    state = ProtrusionAnalysisState.not_computed()

    with ThreadPoolExecutor(max_workers=1) as executor:
        future = pipeline.submit(executor, structure)
        state = ProtrusionAnalysisState.computed(future.result())

    # Already computed: returned as is, nothing is rerun
    state = pipeline.ensure_computed(state, structure)
    print(state)


def example_visuals(report):
    print("\n=== Visual Groups Example ===")

    from protrusion_analysis.algorithms import build_hull_visual, build_sphere_groups

    for group in build_sphere_groups(report):
        print(f"  {group.label}: {group.count} spheres, r={group.radius}, {group.color}")

    hull = build_hull_visual(report).with_opacity(0.5)
    print(
        f"  {hull.ref.label}: {hull.mesh.face_count} faces, "
        f"{hull.mesh.edge_count} edges, opacity={hull.opacity}"
    )


def main():
    pdb_path = sys.argv[1] if len(sys.argv) > 1 else "../pdb/1crn.pdb"
    report = example_python_api(pdb_path)
    if report is not None:
        example_background(pdb_path)
        example_visuals(report)


if __name__ == "__main__":
    main()
