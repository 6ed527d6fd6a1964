import numpy as np
import pytest

import fairmesh.fairing as fairing
import fairmesh.sparse as sparse
import fairmesh.weights as weights


def test_implicit_zero_timestep(bumped_grid):
    points = np.copy(bumped_grid.points)
    fairing.implicit_smooth(bumped_grid, 0.0)

    np.testing.assert_allclose(bumped_grid.points, points, atol=1e-12)


def test_implicit_system(bumped_grid):
    w = weights.compute_weights(bumped_grid)
    A, B = fairing.implicit_system(bumped_grid, 0.1, w)

    n = len(bumped_grid.vertices)
    assert A.shape == (n, n)
    assert B.shape == (n, 3)

    # Off-diagonal entries cancel the time step part of the diagonal.
    np.testing.assert_allclose(A @ np.ones(n), 1.0 / w.vertex)
    np.testing.assert_allclose(B, bumped_grid.points / w.vertex[:, None])
    assert abs(A - A.T).max() < 1e-12


def test_implicit_smoothing_flattens(bumped_grid):
    height = np.abs(bumped_grid.points[:, 2]).max()

    fairing.implicit_smooth(bumped_grid, 1e-3)

    assert np.abs(bumped_grid.points[:, 2]).max() < height


def test_implicit_larger_step_smooths_more(bumped_grid):
    other = bumped_grid.copy()

    fairing.implicit_smooth(bumped_grid, 1e-4)
    fairing.implicit_smooth(other, 1e-2)

    assert (np.abs(other.points[:, 2]).max()
            < np.abs(bumped_grid.points[:, 2]).max())


def test_implicit_negative_timestep(grid):
    with pytest.raises(ValueError):
        fairing.implicit_smooth(grid, -1.0)


def test_implicit_isolated_vertex_pinned(capsys):
    from fairmesh.hds import Mesh

    mesh = Mesh([[0, 0, 0], [1, 0, 0], [0, 1, 0], [4, 4, 4]], [[0, 1, 2]])
    fairing.implicit_smooth(mesh, 0.5)

    np.testing.assert_allclose(mesh.points[3], [4.0, 4.0, 4.0])


def test_minimal_surface_flat(bumped_grid):
    reference = bumped_grid.snapshot()

    fairing.minimal_surface(bumped_grid, reference)

    np.testing.assert_allclose(bumped_grid.points[:, 2], 0.0, atol=1e-10)


def test_minimal_surface_disk(disk):
    reference = disk.snapshot()

    fairing.minimal_surface(disk, reference)

    np.testing.assert_allclose(disk.points[:, 2], 0.0, atol=1e-10)


def test_minimal_surface_restores_boundary(bumped_grid):
    reference = bumped_grid.snapshot()
    boundary = np.array([v.boundary for v in bumped_grid.vertices])

    bumped_grid.points[boundary, 2] += 0.1
    fairing.minimal_surface(bumped_grid, reference)

    np.testing.assert_allclose(bumped_grid.points[boundary],
                               reference.points[boundary])


def test_minimal_surface_system(bumped_grid):
    A, B = fairing.minimal_surface_system(bumped_grid, bumped_grid)
    A = A.toarray()

    for v in bumped_grid.vertices:
        if v.boundary:
            expected = np.zeros(len(bumped_grid.vertices))
            expected[v] = 1.0

            np.testing.assert_array_equal(A[v], expected)
            np.testing.assert_array_equal(B[v], v.point)
        else:
            assert abs(A[v].sum()) < 1e-12
            np.testing.assert_array_equal(B[v], 0.0)


def test_minimal_surface_reference_mismatch(grid, hexfan):
    with pytest.raises(ValueError):
        fairing.minimal_surface(grid, hexfan)


def test_minimal_surface_reports_area(grid, capsys):
    fairing.minimal_surface(grid, grid.snapshot(), quiet=False)
    out = capsys.readouterr().out

    assert 'sum of area: 2\n' in out


def test_failed_solve_keeps_positions(bumped_grid, monkeypatch):
    def fail(A, B, what):
        raise sparse.SolverError(f'{what}: factorization failed')

    monkeypatch.setattr(sparse, 'solve_general', fail)
    monkeypatch.setattr(sparse, 'solve_symmetric', fail)

    points = np.copy(bumped_grid.points)

    with pytest.raises(sparse.SolverError, match='minimal surface'):
        fairing.minimal_surface(bumped_grid, bumped_grid.snapshot())

    with pytest.raises(sparse.SolverError, match='implicit smoothing'):
        fairing.implicit_smooth(bumped_grid, 1.0)

    np.testing.assert_array_equal(bumped_grid.points, points)


@pytest.mark.parametrize('seed', range(6))
def test_minimal_surface_closed(icosahedron, seed):
    rng = np.random.default_rng(seed)
    icosahedron.points += 0.05 * rng.standard_normal((12, 3))
    points = np.copy(icosahedron.points)

    with pytest.raises(sparse.SolverError, match='minimal surface'):
        fairing.minimal_surface(icosahedron, icosahedron.snapshot())

    np.testing.assert_array_equal(icosahedron.points, points)


def test_minimal_surface_closed_component(grid):
    from fairmesh.hds import Mesh

    n = len(grid.vertices)
    tetra = [[0, 0, 2], [1, 0, 2], [0, 1, 2], [0, 0, 3]]
    faces = [[int(v) for v in f] for f in grid.faces]
    faces += [[n + i for i in f]
              for f in [[0, 2, 1], [0, 1, 3], [1, 2, 3], [0, 3, 2]]]

    mesh = Mesh(np.vstack([grid.points, tetra]), faces)

    with pytest.raises(sparse.SolverError, match='4 vertices'):
        fairing.minimal_surface_system(mesh, mesh)
