import numpy as np
import pytest

import fairmesh.sparse as sparse

from fairmesh.processing import MeshProcessing


KEYS = {'normal', 'valence', 'unicurvature', 'curvature', 'gauss_curvature'}


def test_properties(disk):
    session = MeshProcessing(disk)
    n = len(disk.vertices)

    assert set(session.properties) == KEYS
    assert set(session.colors) == KEYS - {'normal'}

    assert session.properties['normal'].shape == (n, 3)
    assert session.properties['curvature'].shape == (n, )

    for colors in session.colors.values():
        assert colors.shape == (n, 3)


def test_center_radius(hexfan):
    session = MeshProcessing(hexfan)

    np.testing.assert_allclose(session.center, 0.0, atol=1e-12)
    assert session.radius == pytest.approx(1.0)


def test_reference_is_frozen(bumped_grid):
    session = MeshProcessing(bumped_grid)
    session.uniform_smooth(3)

    assert session.mesh is bumped_grid
    assert session.reference.points[24, 2] == pytest.approx(0.25)
    assert bumped_grid.points[24, 2] < 0.25

    with pytest.raises(ValueError):
        session.reference.points[0] = 1.0


def test_properties_updated(bumped_grid):
    session = MeshProcessing(bumped_grid)
    before = session.properties['unicurvature'].max()

    session.smooth(5)

    assert session.properties['unicurvature'].max() < before


def test_minimal_surface(bumped_grid):
    session = MeshProcessing(bumped_grid)

    session.smooth(2)
    session.minimal_surface()

    np.testing.assert_allclose(bumped_grid.points[:, 2], 0.0, atol=1e-10)
    np.testing.assert_allclose(session.properties['gauss_curvature'],
                               0.0, atol=1e-8)


def test_operations(bumped_grid):
    session = MeshProcessing(bumped_grid)
    points = np.copy(bumped_grid.points)

    session.implicit_smoothing(0.0)
    np.testing.assert_allclose(bumped_grid.points, points, atol=1e-12)

    session.uniform_laplacian_enhance_feature(5, 1)
    np.testing.assert_allclose(bumped_grid.points, points, atol=1e-12)

    session.laplace_beltrami_enhance_feature(5, 1.0)
    np.testing.assert_allclose(bumped_grid.points, points, atol=1e-12)


def test_failed_solve(bumped_grid, monkeypatch):
    def fail(A, B, what):
        raise sparse.SolverError(what)

    session = MeshProcessing(bumped_grid)
    monkeypatch.setattr(sparse, 'solve_symmetric', fail)

    points = np.copy(bumped_grid.points)

    with pytest.raises(sparse.SolverError):
        session.implicit_smoothing(1.0)

    np.testing.assert_array_equal(bumped_grid.points, points)


def test_closest_vertex(grid):
    session = MeshProcessing(grid)
    point = session.closest_vertex([0.0, 1.0, 3.0], [0.0, 0.0, 1.0])

    np.testing.assert_allclose(point, [0.0, 1.0, 0.0])

    point[:] = 5.0
    assert not np.any(grid.points == 5.0)


def test_from_file(disk, tmp_path, capsys):
    filename = tmp_path / 'disk.obj'
    disk.write(filename)

    session = MeshProcessing(filename, quiet=False)
    out = capsys.readouterr().out

    assert session.mesh.size == disk.size
    assert 'disk.obj' in out
    assert '16 vertices' in out


def test_verbose_session(hexfan, capsys):
    MeshProcessing(hexfan, quiet=False)
    out = capsys.readouterr().out

    assert '# of vertices: 7' in out
    assert '# of edges: 12' in out
