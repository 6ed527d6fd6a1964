import math

import numpy as np
import pytest

from fairmesh.hds import Mesh


def make_grid(m, bump=0.0):
    """ Regular (m+1) x (m+1) grid of right triangles in the unit square.

    Interior vertices are lifted by a bump that vanishes on the boundary.
    """
    points = []
    faces = []

    for i in range(m + 1):
        for j in range(m + 1):
            z = bump * 16 * i * (m - i) * j * (m - j) / m**4
            points.append([i / m, j / m, z])

    for i in range(m):
        for j in range(m):
            a = i * (m + 1) + j
            b = a + m + 1
            faces.append([a, b, b + 1])
            faces.append([a, b + 1, a + 1])

    return Mesh(points, faces, name='grid')


def make_fan(k=6, height=0.0):
    """ Fan of `k` triangles around a center vertex lifted by `height`.
    """
    points = [[0.0, 0.0, height]]
    points += [[math.cos(2 * math.pi * i / k),
                math.sin(2 * math.pi * i / k), 0.0] for i in range(k)]
    faces = [[0, 1 + i, 1 + (i + 1) % k] for i in range(k)]

    return Mesh(points, faces, name='fan')


@pytest.fixture
def grid():
    return make_grid(6)


@pytest.fixture
def bumped_grid():
    return make_grid(6, bump=0.25)


@pytest.fixture
def hexfan():
    return make_fan()


@pytest.fixture
def disk():
    # Irregular disk: center vertex, inner ring of 5 and outer ring of 10.
    points = [[0.0, 0.0, 0.0]]
    points += [[0.5 * math.cos(2 * math.pi * i / 5),
                0.5 * math.sin(2 * math.pi * i / 5), 0.2] for i in range(5)]
    points += [[math.cos(2 * math.pi * i / 10),
                math.sin(2 * math.pi * i / 10), 0.0] for i in range(10)]

    faces = [[0, 1 + i, 1 + (i + 1) % 5] for i in range(5)]

    for i in range(5):
        a, b = 1 + i, 1 + (i + 1) % 5
        o0, o1, o2 = 6 + 2 * i, 6 + 2 * i + 1, 6 + (2 * i + 2) % 10
        faces += [[a, o0, o1], [a, o1, b], [b, o1, o2]]

    return Mesh(points, faces, name='disk')


@pytest.fixture
def octahedron():
    points = [[1, 0, 0], [-1, 0, 0], [0, 1, 0],
              [0, -1, 0], [0, 0, 1], [0, 0, -1]]
    faces = [[0, 2, 4], [2, 1, 4], [1, 3, 4], [3, 0, 4],
             [2, 0, 5], [1, 2, 5], [3, 1, 5], [0, 3, 5]]

    return Mesh(points, faces, name='octahedron')


@pytest.fixture
def icosahedron():
    t = (1.0 + math.sqrt(5.0)) / 2.0

    points = [[-1, t, 0], [1, t, 0], [-1, -t, 0], [1, -t, 0],
              [0, -1, t], [0, 1, t], [0, -1, -t], [0, 1, -t],
              [t, 0, -1], [t, 0, 1], [-t, 0, -1], [-t, 0, 1]]
    faces = [[0, 11, 5], [0, 5, 1], [0, 1, 7], [0, 7, 10], [0, 10, 11],
             [1, 5, 9], [5, 11, 4], [11, 10, 2], [10, 7, 6], [7, 1, 8],
             [3, 9, 4], [3, 4, 2], [3, 2, 6], [3, 6, 8], [3, 8, 9],
             [4, 9, 5], [2, 4, 11], [6, 2, 10], [8, 6, 7], [9, 8, 1]]

    points = np.array(points, dtype=float)
    points /= np.linalg.norm(points, axis=-1)[:, None]

    return Mesh(points, faces, name='icosahedron')
