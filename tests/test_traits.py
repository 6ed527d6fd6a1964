import math

import numpy as np
import pytest

import fairmesh.traits as traits

from fairmesh.hds import Mesh


def test_bounding_sphere(hexfan):
    center, radius = traits.bounding_sphere(hexfan.points)

    np.testing.assert_allclose(center, 0.0, atol=1e-12)
    assert math.isclose(radius, 1.0)


def test_areas(grid, hexfan):
    assert math.isclose(traits.surface_area(grid), 1.0)
    assert math.isclose(traits.surface_area(hexfan),
                        6.0 * math.sqrt(3.0) / 4.0)


def test_face_area_quad():
    mesh = Mesh([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]],
                [[0, 1, 2, 3]])

    with pytest.raises(NotImplementedError):
        traits.face_area(mesh.faces[0])


def test_vertex_normals(grid, octahedron):
    np.testing.assert_allclose(traits.vertex_normals(grid),
                               np.tile([0.0, 0.0, 1.0], (49, 1)),
                               atol=1e-12)

    # Outward normals of a centered convex polyhedron.
    normals = traits.vertex_normals(octahedron)
    np.testing.assert_allclose(normals, octahedron.points, atol=1e-12)


def test_valences(hexfan):
    np.testing.assert_array_equal(traits.valences(hexfan),
                                  [6, 3, 3, 3, 3, 3, 3])


def test_closest_vertex(grid):
    v = traits.closest_vertex(grid, [0.5, 0.5, 1.0], [0.0, 0.0, -2.0])

    assert v.index == 24
    np.testing.assert_allclose(v.point, [0.5, 0.5, 0.0])

    # Only the distance to the line matters, not the ray parameter.
    v = traits.closest_vertex(grid, [1.0, 0.0, -5.0], [0.0, 0.0, 1.0])
    np.testing.assert_allclose(v.point, [1.0, 0.0, 0.0])


def test_closest_vertex_zero_direction(grid):
    with pytest.raises(ValueError):
        traits.closest_vertex(grid, [0, 0, 0], [0, 0, 0])
