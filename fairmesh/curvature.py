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

""" Discrete curvature estimators.

All estimators return one scalar per vertex. Boundary vertices and isolated
vertices are assigned zero curvature.

    - :func:`uniform_mean_curvature`: half the length of the uniform
      (umbrella) Laplacian.
    - :func:`mean_curvature`: half the length of the cotangent
      Laplace-Beltrami operator applied to vertex coordinates.
    - :func:`gauss_curvature`: angle defect scaled by the inverse area
      vertex weight.

The Laplacian vector fields themselves are available via
:func:`uniform_laplacian` and :func:`cotan_laplacian`; the explicit
smoothers are built on top of them.
"""

import math
import numpy as np

import fairmesh.linalg as linalg
import fairmesh.weights as _weights


def _interior(vertex):
    return not (vertex.isolated or vertex.boundary)


def uniform_laplacian(mesh):
    r""" Uniform Laplacian.

    For each interior vertex :math:`p` with neighbors :math:`p_1, \dots,
    p_k` the vector :math:`\frac{1}{k} \sum_j (p_j - p)`.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, 3)
        Laplacian vectors, zero rows for boundary and isolated vertices.
    """
    laplace = np.zeros_like(mesh.points)

    for v in mesh.vertices:
        if not _interior(v):
            continue

        p = v.point
        n = 0

        for w in v._viter():
            laplace[v] += w.point - p
            n += 1

        laplace[v] /= n

    return laplace


def cotan_laplacian(mesh, edge_weights, vertex_weights=None):
    r""" Cotangent weighted Laplacian.

    For each interior vertex :math:`p` the sum :math:`\sum_j w_j (p_j - p)`
    over its one-ring, where :math:`w_j` is the weight of the edge to
    neighbor :math:`p_j`. The sum is either scaled by the vertex weight
    (Laplace-Beltrami operator) or normalized by the sum of one-ring
    edge weights (weighted averaging).

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.
    edge_weights : ~numpy.ndarray, shape (e, )
        Cotangent edge weights.
    vertex_weights : ~numpy.ndarray, shape (n, ), optional
        Inverse area vertex weights. If omitted, each sum is divided by
        the sum of the one-ring edge weights instead.

    Returns
    -------
    ~numpy.ndarray, shape (n, 3)
        Laplacian vectors, zero rows for boundary and isolated vertices.
        Also zero if the one-ring weight sum vanishes when normalizing.
    """
    laplace = np.zeros_like(mesh.points)

    for v in mesh.vertices:
        if not _interior(v):
            continue

        p = v.point
        ww = 0.0

        for h in v._hiter():
            w = edge_weights[h._edge]
            ww += w

            laplace[v] += w * (h._target.point - p)

        if vertex_weights is not None:
            laplace[v] *= vertex_weights[v]
        elif abs(ww) < linalg.EPS:
            laplace[v] = 0.0
        else:
            laplace[v] /= ww

    return laplace


def uniform_mean_curvature(mesh):
    """ Uniform mean curvature.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Half the length of the uniform Laplacian per vertex.
    """
    return 0.5 * np.linalg.norm(uniform_laplacian(mesh), axis=-1)


def mean_curvature(mesh, weights=None):
    """ Laplace-Beltrami mean curvature.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.
    weights : Weights, optional
        Precomputed edge and vertex weights, computed from the current
        vertex coordinates if omitted.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Half the length of the Laplace-Beltrami operator per vertex.
    """
    if weights is None:
        weights = _weights.compute_weights(mesh)

    laplace = cotan_laplacian(mesh, weights.edge, weights.vertex)

    return 0.5 * np.linalg.norm(laplace, axis=-1)


def gauss_curvature(mesh, vertex_weights=None):
    r""" Angle defect Gaussian curvature.

    For an interior vertex with incident angles :math:`\alpha_i` the value
    :math:`2 (2\pi - \sum_i \alpha_i) \, a`, where :math:`a` is the inverse
    area vertex weight.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.
    vertex_weights : ~numpy.ndarray, shape (n, ), optional
        Inverse area vertex weights, computed from the current vertex
        coordinates if omitted.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Gaussian curvature per vertex.

    Note
    ----
    An angle spanned by a zero-length edge contributes nothing to the
    angle sum.
    """
    if vertex_weights is None:
        vertex_weights = _weights.vertex_weights(mesh)

    curvature = np.zeros(len(mesh.vertices))

    for v in mesh.vertices:
        if not _interior(v):
            continue

        # Consecutive outgoing halfedges h and h.prev.pair span the
        # angle of the face of h at v.
        angles = sum(linalg.angle(h.vector, h._prev._pair.vector)
                     for h in v._hiter())

        curvature[v] = (2.0 * math.pi - angles) * 2.0 * vertex_weights[v]

    return curvature
