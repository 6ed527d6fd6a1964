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

""" Cotangent edge weights and inverse area vertex weights.

The cotangent discretization of the Laplace-Beltrami operator assigns each
edge the sum of the cotangents of the angles opposite to it, and each
vertex a weight reciprocal to its barycentric area. Both are returned as
plain NumPy arrays indexed by edge and vertex indices. Nothing is stored
on the mesh, so values from earlier passes can never go stale.

Degenerate triangles (vanishing cross product) contribute nothing to an
edge weight. Vertices with (almost) vanishing area, e.g. isolated vertices,
keep a vertex weight of zero.
"""

from collections import namedtuple

import numpy as np

import fairmesh.linalg as linalg
import fairmesh.traits as traits


Weights = namedtuple('Weights', ['edge', 'vertex'])
Weights.__doc__ = """ Edge and vertex weights of a mesh.

Attributes
----------
edge : ~numpy.ndarray, shape (e, )
    Cotangent weight per edge.
vertex : ~numpy.ndarray, shape (n, )
    Inverse area weight per vertex.
"""


def edge_weights(mesh):
    r""" Cotangent edge weights.

    For an edge :math:`e = (p_0, p_1)` and each incident triangle with
    third vertex :math:`p_2` the term

    .. math::

       \cot \alpha = \frac{\mathbf{d}_0^T \mathbf{d}_1}
                          {\| \mathbf{d}_0 \times \mathbf{d}_1 \|},
       \quad \mathbf{d}_i = p_i - p_2

    is added to the weight of :math:`e`. Boundary edges receive a single
    term.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (e, )
        Edge weights indexed by :attr:`~fairmesh.hds.Halfedge.edge`.

    Note
    ----
    Weights are not clamped. Obtuse triangles produce negative terms.
    """
    weights = np.zeros(len(mesh.edges))

    for h in mesh._eiter():
        p0 = h._origin.point
        p1 = h._target.point

        for hh in (h, h._pair):
            if hh._face is None:
                continue

            p2 = hh._next._target.point
            weights[h._edge] += linalg.cotan(p0 - p2, p1 - p2)

    return weights


def vertex_weights(mesh):
    """ Inverse area vertex weights.

    Each vertex is assigned one third of the area of its incident faces
    (barycentric cell). The weight is ``0.5 / area``.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Vertex weights indexed by vertex indices. Zero where the
        barycentric area vanishes.
    """
    weights = np.zeros(len(mesh.vertices))

    for v in mesh.vertices:
        area = sum(traits.face_area(f) for f in v._fiter()) / 3.0

        if area < linalg.EPS:
            continue

        weights[v] = 0.5 / area

    return weights


def compute_weights(mesh):
    """ Edge and vertex weights.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    Weights
        Cotangent edge weights and inverse area vertex weights computed
        from the current vertex coordinates.
    """
    return Weights(edge_weights(mesh), vertex_weights(mesh))
