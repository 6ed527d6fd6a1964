# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Per-item geometry.

Normals, areas and valences of a mesh, plus picking the vertex
closest to a viewing ray. Everything is evaluated from the current vertex
coordinates, nothing is cached.
"""

import numpy as np

import fairmesh.linalg as linalg


def bounding_sphere(points):
    """ Centroid and radius.

    Parameters
    ----------
    points : array_like, shape (n, 3)
        Vertex coordinates.

    Returns
    -------
    center : ~numpy.ndarray, shape (3, )
        Arithmetic mean of all points.
    radius : float
        Maximal distance of a point to `center`.
    """
    points = np.asarray(points)
    center = points.mean(axis=0)

    return center, float(np.max(np.linalg.norm(points - center, axis=-1)))


def face_normal(face):
    """ Unit normal of a triangle.

    Parameters
    ----------
    face : Face
        Triangular face of a mesh.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Unit normal vector, :obj:`None` for degenerate faces.
    """
    return linalg.unit(linalg.cross(face.halfedge.vector,
                                    face.halfedge.next.vector))


def face_area(face):
    """ Face area.

    Half the length of the cross product of two edge vectors.

    Parameters
    ----------
    face : Face
        A triangular face.

    Raises
    ------
    NotImplementedError
        For non-triangular faces.

    Returns
    -------
    float
        Face area.
    """
    if len(face) != 3:
        raise NotImplementedError('triangular face required')

    vector = linalg.cross(face.halfedge.vector, face.halfedge.next.vector)

    return 0.5 * linalg.norm(vector)


def surface_area(mesh):
    """ Total area of all faces.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    float
        Sum of face areas.
    """
    return sum(face_area(f) for f in mesh.faces)


def vertex_normals(mesh):
    """ Vertex normals.

    Compute vertex normals as average of face normals. Each face broadcasts
    its normal vector to its vertices.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, 3)
        Unit normals, one row per vertex.

    Note
    ----
    Vertex normals are not defined for isolated vertices and vertices
    incident only to degenerate faces. Such vertices get a zero vector.
    """
    normals = np.zeros_like(mesh.points)

    for f in mesh.faces:
        n = face_normal(f)

        if n is not None:
            for v in f._viter():
                normals[v] += n

    length = np.linalg.norm(normals, axis=-1)
    valid = length > linalg.EPS

    normals[valid] /= length[valid, None]
    return normals


def valences(mesh):
    """ Vertex valences.

    Parameters
    ----------
    mesh : Mesh
        A mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Number of adjacent vertices, as floating point values.
    """
    return np.array([v.degree for v in mesh.vertices], dtype=float)


def closest_vertex(mesh, origin, direction):
    """ Vertex closest to a ray.

    Linear scan over all vertices. The distance of a vertex is measured
    orthogonally to the line through `origin` with the given direction.

    Parameters
    ----------
    mesh : Mesh
        A mesh.
    origin : array_like, shape (3, )
        Ray origin.
    direction : array_like, shape (3, )
        Ray direction, need not be normalized.

    Raises
    ------
    ValueError
        For a vanishing direction vector.

    Returns
    -------
    Vertex
        The closest vertex.
    """
    origin = np.asarray(origin, dtype=float)
    direction = linalg.unit(np.asarray(direction, dtype=float))

    if direction is None:
        raise ValueError('ray direction vanishes')

    offset = mesh.points - origin
    foot = offset - np.outer(offset @ direction, direction)

    return mesh.vertices[int(np.argmin(np.linalg.norm(foot, axis=-1)))]
