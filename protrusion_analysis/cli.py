#!/usr/bin/env python3
"""
Hydrophobic protrusion analysis command line tool

Usage example:
    protrusion-analysis 1abc.pdb 2xyz.cif --chains A --output-dir results --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

from .algorithms.protrusion_pipeline import ProtrusionPipeline
from .core.data_models import (
    ALL,
    DISTANCE_CUTOFF,
    LOW_DENSITY_THRESHOLD,
    AnalysisConfig,
    AtomNameFilter,
    NeighborMethod,
    SelectionQuery,
)
from .core.exceptions import ProtrusionAnalysisError
from .io_utils.csv_writer import CSVWriter
from .io_utils.result_formatter import ResultFormatter
from .io_utils.structure_loader import StructureLoader
from .utils.logger import setup_logger
from .utils.progress import ProgressBar
from .utils.validation import validate_config, validate_output_dir


def parse_id_list(value: str):
    """``ALL`` or a comma separated list; an empty string is an empty filter"""
    if value.strip().upper() == "ALL":
        return ALL
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protrusion-analysis",
        description="Find protruding (and hydrophobic protruding) residues on a protein convex hull",
    )
    parser.add_argument("structures", nargs="+", help="PDB (.pdb/.ent) or mmCIF (.cif) files")
    parser.add_argument("--chains", type=parse_id_list, default=ALL,
                        help="comma separated chain ids, or ALL (default)")
    parser.add_argument("--residues", type=parse_id_list, default=ALL,
                        help="comma separated residue names, or ALL (default)")
    parser.add_argument("--atoms", choices=[f.value for f in AtomNameFilter],
                        default=AtomNameFilter.BOTH.value)
    parser.add_argument("--distance-cutoff", type=float, default=DISTANCE_CUTOFF)
    parser.add_argument("--density-threshold", type=int, default=LOW_DENSITY_THRESHOLD)
    parser.add_argument("--neighbor-method", choices=[m.value for m in NeighborMethod],
                        default=NeighborMethod.BRUTE_FORCE.value)
    parser.add_argument("--nproc", type=int, default=1)
    parser.add_argument("--chunk", type=int, default=5000)
    parser.add_argument("--output-dir", default=None,
                        help="write <name>_protrusions.csv and <name>_hull.csv here")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser


def analyze_file(path: str, pipeline: ProtrusionPipeline, query: SelectionQuery,
                 loader: StructureLoader, output_dir: Path | None) -> str:
    structure = loader.load(path)
    report = pipeline.run(structure, query)

    name = Path(path).stem
    if output_dir is not None:
        CSVWriter.write_atoms(output_dir / f"{name}_protrusions.csv", report.result)
        CSVWriter.write_mesh(output_dir / f"{name}_hull.csv", report.mesh)

    return ResultFormatter.format_summary(report, name)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger = setup_logger(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )

    config = AnalysisConfig(
        distance_cutoff=args.distance_cutoff,
        density_threshold=args.density_threshold,
        neighbor_method=NeighborMethod(args.neighbor_method),
        chunk_size=args.chunk,
        num_processes=args.nproc,
    )
    try:
        validate_config(config)
        pipeline = ProtrusionPipeline(config)
        output_dir = validate_output_dir(args.output_dir) if args.output_dir else None
    except ValueError as e:
        logger.error(str(e))
        return 2

    query = SelectionQuery(
        chains=args.chains, residues=args.residues, atom_names=AtomNameFilter(args.atoms)
    )
    loader = StructureLoader(quiet=not args.verbose)

    summaries = []
    failures = 0
    show_progress = len(args.structures) > 1

    progress = ProgressBar(len(args.structures)) if show_progress else None
    for path in args.structures:
        try:
            summaries.append(analyze_file(path, pipeline, query, loader, output_dir))
        except (ProtrusionAnalysisError, FileNotFoundError, ValueError) as e:
            failures += 1
            logger.error(f"{path}: {e}")
        if progress is not None:
            progress.advance(Path(path).name)
    if progress is not None:
        progress.finish()

    for summary in summaries:
        print(summary)
        print()

    if failures:
        logger.error(f"{failures}/{len(args.structures)} structures failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
