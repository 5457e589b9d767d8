"""Tests for render-ready protrusion visuals."""

import pytest

from protrusion_analysis import AnalysisConfig, ProtrusionPipeline
from protrusion_analysis.algorithms.visual_groups import (
    LARGE_SPHERE_RADIUS,
    SMALL_SPHERE_RADIUS,
    VisualGroup,
    build_hull_visual,
    build_sphere_groups,
)


@pytest.fixture
def report(blob_structure):
    return ProtrusionPipeline().run(blob_structure)


def test_sphere_groups_order_and_style(report):
    groups = build_sphere_groups(report)

    assert [g.ref for g in groups] == [
        VisualGroup.NORMAL_CA_CB,
        VisualGroup.HYDRO_CA_CB,
        VisualGroup.NORMAL_PROTRUSION,
        VisualGroup.HYDRO_PROTRUSION,
    ]
    assert [g.radius for g in groups] == [
        SMALL_SPHERE_RADIUS,
        SMALL_SPHERE_RADIUS,
        LARGE_SPHERE_RADIUS,
        LARGE_SPHERE_RADIUS,
    ]
    assert [g.color for g in groups] == ["gray", "orange", "gray", "orange"]


def test_sphere_groups_follow_result(report):
    by_ref = {g.ref: g for g in build_sphere_groups(report)}

    assert by_ref[VisualGroup.NORMAL_CA_CB].count == len(report.atoms)
    assert by_ref[VisualGroup.HYDRO_CA_CB].count == len(report.result.hydrophobic_atoms)
    protrusions = by_ref[VisualGroup.HYDRO_PROTRUSION]
    assert protrusions.center_labels == [a.label for a in report.result.hydrophobic_protruding_atoms]
    assert protrusions.centers.shape == (protrusions.count, 3)
    assert protrusions.label == "Hydrophobic protrusions"


def test_empty_report_gives_empty_groups(blob_structure):
    from protrusion_analysis import SelectionQuery

    report = ProtrusionPipeline().run(blob_structure, SelectionQuery(chains=frozenset()))
    groups = build_sphere_groups(report)

    assert all(g.count == 0 for g in groups)
    assert all(g.centers.shape == (0, 3) for g in groups)
    assert build_hull_visual(report).mesh.is_empty()


def test_hull_visual_callbacks(report):
    visual = build_hull_visual(report, face_color="blue", edge_color="black", opacity=0.7)
    face_count = report.mesh.face_count

    assert visual.ref is VisualGroup.CONVEX_HULL
    assert visual.ref.label == "Convex hull"
    assert visual.group_label(0) == "face 0"
    assert visual.group_label(face_count) == f"edge {face_count}"
    assert visual.group_color(face_count - 1) == "blue"
    assert visual.group_color(face_count) == "black"
    assert visual.points.shape == (len(report.atoms), 3)


def test_opacity_restyle_keeps_mesh(report):
    visual = build_hull_visual(report)
    faded = visual.with_opacity(0.2)

    assert faded.opacity == 0.2
    assert faded.mesh is visual.mesh
    assert visual.opacity == 0.7


def test_opacity_out_of_range(report):
    with pytest.raises(ValueError):
        build_hull_visual(report, opacity=1.2)


def test_hull_visual_uses_configured_style(blob_structure):
    config = AnalysisConfig(hull_color="red", edge_color="white", hull_opacity=0.2)
    report = ProtrusionPipeline(config).run(blob_structure)
    visual = build_hull_visual(report)
    face_count = report.mesh.face_count

    assert visual.group_color(0) == "red"
    assert visual.group_color(face_count) == "white"
    assert visual.opacity == 0.2


def test_hull_visual_overrides_configured_style(blob_structure):
    report = ProtrusionPipeline(AnalysisConfig(hull_color="red")).run(blob_structure)
    visual = build_hull_visual(report, face_color="green", opacity=1.0)

    assert visual.group_color(0) == "green"
    assert visual.group_color(report.mesh.face_count) == "black"
    assert visual.opacity == 1.0
