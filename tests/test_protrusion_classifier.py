"""Tests for protrusion classification and neighbor counting."""

import numpy as np
import pytest

from conftest import ISOLATED_POSITION, make_atoms
from protrusion_analysis.core.convex_hull import ConvexHullBuilder, hull_vertex_set
from protrusion_analysis.core.data_models import HYDROPHOBICS
from protrusion_analysis.core.neighbor_counter import (
    BruteForceNeighborCounter,
    KDTreeNeighborCounter,
)
from protrusion_analysis.core.protrusion_classifier import ProtrusionClassifier


@pytest.fixture
def cloud_atoms():
    rng = np.random.default_rng(5)
    coords = rng.normal(scale=7.0, size=(150, 3))
    names = ["CA" if i % 2 == 0 else "CB" for i in range(len(coords))]
    resnames = [("LEU", "ALA", "PHE", "SER", "MET")[i % 5] for i in range(len(coords))]
    return make_atoms(coords, names, resnames)


@pytest.fixture
def cloud_faces(cloud_atoms):
    return ConvexHullBuilder().build([a.coordinate for a in cloud_atoms])


def protruding_ids(result):
    return {a.id for a in result.protruding_atoms}


def test_isolated_hydrophobic_atom_is_a_protrusion():
    rng = np.random.default_rng(1)
    core = rng.uniform(-2.5, 2.5, size=(40, 3))
    coords = np.vstack([core, [ISOLATED_POSITION]])
    resnames = ["ALA"] * 40 + ["LEU"]
    atoms = make_atoms(coords, resnames=resnames)
    faces = ConvexHullBuilder().build(coords)

    result = ProtrusionClassifier().classify(atoms, faces)

    isolated = atoms[-1]
    assert 40 in hull_vertex_set(faces)
    assert isolated in result.protruding_atoms
    assert isolated in result.hydrophobic_protruding_atoms
    # Core atoms are all within 10 Å of each other: 39 neighbors apiece
    assert result.protruding_atoms == [isolated]
    assert result.hydrophobic_atoms == [isolated]


def test_subset_invariants(cloud_atoms, cloud_faces):
    result = ProtrusionClassifier().classify(cloud_atoms, cloud_faces, density_threshold=30)

    vertices = hull_vertex_set(cloud_faces)
    cb_vertex_ids = {cloud_atoms[i].id for i in vertices if cloud_atoms[i].is_cb}
    protruding = protruding_ids(result)
    hydro_protruding = {a.id for a in result.hydrophobic_protruding_atoms}

    assert protruding
    assert protruding <= cb_vertex_ids
    assert hydro_protruding <= protruding
    assert all(a.residue_name in HYDROPHOBICS for a in result.hydrophobic_protruding_atoms)
    assert result.all_atoms == cloud_atoms


def test_hydrophobic_atoms_ignore_hull_membership(cloud_atoms, cloud_faces):
    result = ProtrusionClassifier().classify(cloud_atoms, cloud_faces)

    expected = [a for a in cloud_atoms if a.residue_name in HYDROPHOBICS]
    assert result.hydrophobic_atoms == expected
    assert {a.name for a in result.hydrophobic_atoms} == {"CA", "CB"}


def test_raising_density_threshold_never_removes(cloud_atoms, cloud_faces):
    classifier = ProtrusionClassifier()
    previous = set()
    for threshold in (1, 5, 10, 22, 40, 80, 200):
        current = protruding_ids(
            classifier.classify(cloud_atoms, cloud_faces, density_threshold=threshold)
        )
        assert previous <= current
        previous = current


def test_lowering_cutoff_never_removes(cloud_atoms, cloud_faces):
    classifier = ProtrusionClassifier()
    previous = set()
    for cutoff in (20.0, 15.0, 10.0, 7.5, 5.0, 2.0):
        current = protruding_ids(classifier.classify(cloud_atoms, cloud_faces, distance_cutoff=cutoff))
        assert previous <= current
        previous = current


def test_custom_hydrophobic_set(cloud_atoms, cloud_faces):
    result = ProtrusionClassifier().classify(
        cloud_atoms,
        cloud_faces,
        density_threshold=1000,
        hydrophobic_set={"ala", "phe", "ser", "met"},
    )
    assert result.hydrophobic_protruding_atoms
    assert "LEU" not in {a.residue_name for a in result.hydrophobic_protruding_atoms}


def test_empty_faces_gives_empty_result(cloud_atoms):
    result = ProtrusionClassifier().classify(cloud_atoms, [])
    assert result.is_empty()


def test_face_index_out_of_range(cloud_atoms):
    with pytest.raises(ValueError):
        ProtrusionClassifier().classify(cloud_atoms[:3], [(0, 1, 5)])


def test_neighbors_include_ca_atoms():
    # One CB vertex with three CA atoms nearby
    coords = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)]
    atoms = make_atoms(coords, names=["CB", "CA", "CA", "CA"])
    faces = ConvexHullBuilder().build(coords)

    assert protruding_ids(ProtrusionClassifier().classify(atoms, faces, density_threshold=4)) == {0}
    assert protruding_ids(ProtrusionClassifier().classify(atoms, faces, density_threshold=3)) == set()


class TestNeighborCounters:
    def test_strict_cutoff_and_self_exclusion(self):
        coords = np.array([[0, 0, 0], [10, 0, 0], [0, 9.999, 0], [0, 0, 0]], dtype=float)
        for counter in (BruteForceNeighborCounter(), KDTreeNeighborCounter()):
            counts = counter.count_neighbors(coords, [0, 1], 10.0)
            # Point 1 sits exactly at the cutoff from 0 and 3
            assert counts.tolist() == [2, 0]

    @pytest.mark.parametrize("num_processes", [1, 3])
    def test_kdtree_matches_brute_force(self, num_processes):
        rng = np.random.default_rng(9)
        coords = np.round(rng.uniform(0, 30, size=(400, 3)), 1)
        query = list(range(0, 400, 3))

        expected = BruteForceNeighborCounter(chunk_size=64).count_neighbors(coords, query, 6.0)
        actual = KDTreeNeighborCounter(num_processes).count_neighbors(coords, query, 6.0)

        np.testing.assert_array_equal(actual, expected)

    def test_chunking_does_not_change_counts(self):
        rng = np.random.default_rng(2)
        coords = rng.uniform(0, 20, size=(300, 3))
        query = [0, 17, 150, 299]
        a = BruteForceNeighborCounter(chunk_size=7).count_neighbors(coords, query, 5.0)
        b = BruteForceNeighborCounter(chunk_size=5000).count_neighbors(coords, query, 5.0)
        np.testing.assert_array_equal(a, b)

    def test_empty_query(self):
        coords = np.zeros((3, 3))
        assert len(BruteForceNeighborCounter().count_neighbors(coords, [], 1.0)) == 0
        assert len(KDTreeNeighborCounter().count_neighbors(coords, [], 1.0)) == 0


def test_faces_as_array(cloud_atoms, cloud_faces):
    classifier = ProtrusionClassifier()
    expected = classifier.classify(cloud_atoms, cloud_faces, density_threshold=30)
    actual = classifier.classify(cloud_atoms, np.asarray(cloud_faces), density_threshold=30)

    assert actual.to_dict() == expected.to_dict()
    assert classifier.classify(cloud_atoms, np.empty((0, 3), dtype=int)).is_empty()
