import math

import numpy as np

import fairmesh.weights as weights

from fairmesh.hds import Mesh


def test_edge_weights(hexfan):
    w = weights.edge_weights(hexfan)

    assert w.shape == (12, )

    for h in hexfan.edges:
        if int(h.origin) == 0 or int(h.target) == 0:
            # Interior edge, two opposite angles of 60 degrees.
            assert math.isclose(w[h.edge], 2.0 / math.sqrt(3.0))
        else:
            # Boundary edge, a single opposite angle.
            assert math.isclose(w[h.edge], 1.0 / math.sqrt(3.0))


def test_vertex_weights(hexfan):
    w = weights.vertex_weights(hexfan)

    assert math.isclose(w[0], 1.0 / math.sqrt(3.0))
    np.testing.assert_allclose(w[1:], math.sqrt(3.0))


def test_obtuse_weights_not_clamped():
    # The angle opposite the edge (0, 1) is 120 degrees.
    points = [[-1.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1/math.sqrt(3), 0.0]]
    mesh = Mesh(points, [[0, 1, 2]])

    w = weights.edge_weights(mesh)
    h = next(h for h in mesh.edges
             if {int(h.origin), int(h.target)} == {0, 1})

    assert math.isclose(w[h.edge], -1.0 / math.sqrt(3.0))


def test_degenerate_triangle():
    mesh = Mesh([[0, 0, 0], [1, 0, 0], [2, 0, 0]], [[0, 1, 2]])
    w = weights.compute_weights(mesh)

    np.testing.assert_array_equal(w.edge, 0.0)
    np.testing.assert_array_equal(w.vertex, 0.0)


def test_isolated_vertex_weight():
    mesh = Mesh([[0, 0, 0], [1, 0, 0], [0, 1, 0], [3, 3, 3]], [[0, 1, 2]])
    w = weights.compute_weights(mesh)

    assert w.vertex[3] == 0.0
    assert np.all(w.vertex[:3] > 0.0)


def test_weights_follow_geometry(hexfan):
    before = weights.compute_weights(hexfan)
    hexfan.points *= 2.0
    after = weights.compute_weights(hexfan)

    # Cotangents are scale invariant, areas are not.
    np.testing.assert_allclose(after.edge, before.edge)
    np.testing.assert_allclose(after.vertex, before.vertex / 4.0)
