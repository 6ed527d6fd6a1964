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

""" Circulators.

Functions returning fresh generators over the neighborhood of a mesh item.
Each call starts a new traversal, so iterating twice visits the same items
twice. One-rings are traversed in a fixed rotational order: outgoing
halfedge ``h`` is followed by ``h.prev.pair``.

>>> for w in verts(v):                                  # doctest: +SKIP
...     laplace += w.point - v.point
"""


def verts(obj):
    """ Vertices around `obj`.

    One-ring neighbors of a :class:`~fairmesh.hds.Vertex`, corners of a
    :class:`~fairmesh.hds.Face`, or all vertices of a
    :class:`~fairmesh.hds.Mesh` in index order.

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        Center of the traversal.

    Yields
    ------
    Vertex
    """
    return obj._viter()


def halfs(obj):
    """ Halfedges around `obj`.

    Outgoing halfedges of a vertex (including a boundary halfedge, if
    any), the halfedge loop of a face, or all halfedges of a mesh.

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        Center of the traversal.

    Yields
    ------
    Halfedge
    """
    return obj._hiter()


def edges(mesh):
    """ One halfedge per edge, by ascending edge index.

    Parameters
    ----------
    mesh : Mesh
        A mesh.

    Yields
    ------
    Halfedge
    """
    return mesh._eiter()


def faces(obj):
    """ Faces around `obj`.

    Faces incident to a vertex or all faces of a mesh. Boundary gaps
    around a vertex are skipped.

    Parameters
    ----------
    obj : Vertex or Mesh
        Center of the traversal.

    Yields
    ------
    Face
    """
    return obj._fiter()
