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

""" Implicit fairing.

Two global operations that assemble one sparse system with a row per
vertex and solve it for all three coordinate axes at once:

    - :func:`implicit_smooth` performs one backward Euler step of mean
      curvature flow,
    - :func:`minimal_surface` computes the harmonic extension of the
      boundary of a reference mesh.

Vertex coordinates are only overwritten after a successful solve. If the
solver fails, :class:`~fairmesh.sparse.SolverError` propagates and the
mesh is left untouched.
"""

from time import perf_counter

import numpy as np

import fairmesh.sparse as sparse
import fairmesh.traits as traits
import fairmesh.weights as weights


def implicit_system(mesh, timestep, w=None):
    r""" Implicit smoothing system.

    For vertex :math:`i` with inverse area weight :math:`a_i` and one-ring
    edge weights :math:`w_{ij}` the row

    .. math::

       \Big(\frac{1}{a_i} + \tau \sum_j w_{ij}\Big) x_i
           - \tau \sum_j w_{ij} x_j = \frac{1}{a_i} p_i

    is assembled. Vertices with vanishing weight :math:`a_i` (isolated
    vertices or zero area one-rings) get an identity row and keep their
    position.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.
    timestep : float
        Time step :math:`\tau`.
    w : Weights, optional
        Precomputed weights.

    Returns
    -------
    A : ~scipy.sparse.csc_matrix, shape (n, n)
        Symmetric system matrix.
    B : ~numpy.ndarray, shape (n, 3)
        Right-hand side.
    """
    if w is None:
        w = weights.compute_weights(mesh)

    n = len(mesh.vertices)

    A = sparse.Triplets((n, n))
    B = np.zeros((n, 3))

    for v in mesh.vertices:
        a = w.vertex[v]

        if a == 0.0:
            A.append(v, v, 1.0)
            B[v] = v.point
            continue

        B[v] = v.point / a
        ww = 0.0

        for h in v._hiter():
            eweight = w.edge[h._edge]
            ww += eweight

            A.append(v, h._target, -timestep * eweight)

        A.append(v, v, 1.0 / a + timestep * ww)

    return A.tocsc(), B


def implicit_smooth(mesh, timestep, quiet=True):
    """ Implicit mean curvature flow.

    One backward Euler step of size `timestep`. The step is unconditionally
    stable; larger time steps smooth more aggressively.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh, vertex coordinates are modified in place.
    timestep : float
        Non-negative time step. Zero leaves the mesh unchanged.
    quiet : bool, optional
        Suppress console output.

    Raises
    ------
    ValueError
        For negative time steps.
    SolverError
        If the system is singular or not positive definite. This can
        happen when negative cotangent weights dominate.
    """
    if timestep < 0.0:
        raise ValueError(f'time step must be non-negative, got {timestep}')

    start = perf_counter()
    A, B = implicit_system(mesh, timestep)

    X = sparse.solve_symmetric(A, B, what='implicit smoothing')
    mesh.points[...] = X

    if not quiet:
        print(f'implicit smoothing, {timestep=} ' +
              f'({perf_counter()-start:.3f} sec)')


def _unconstrained(mesh):
    """ Vertices not connected to any boundary vertex.

    Isolated vertices are pinned and therefore not reported.
    """
    reached = np.array([v.boundary for v in mesh.vertices], dtype=bool)
    stack = [v for v in mesh.vertices if v.boundary]

    while stack:
        for u in stack.pop()._viter():
            if not reached[u]:
                reached[u] = True
                stack.append(u)

    return [v for v in mesh.vertices if not (reached[v] or v.isolated)]


def minimal_surface_system(mesh, reference, w=None):
    r""" Minimal surface system.

    Boundary vertices get an identity row whose right-hand side is the
    position of the vertex in the `reference` mesh. Interior vertices get
    a cotangent Laplacian row with zero right-hand side,

    .. math::

       \sum_j w_{ij} x_i - \sum_j w_{ij} x_j = 0.

    Isolated vertices are pinned to their current position.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.
    reference : Mesh
        Mesh with identical connectivity, supplies boundary positions.
    w : Weights, optional
        Precomputed weights.

    Raises
    ------
    ValueError
        If the vertex counts of both meshes differ.
    SolverError
        If a connected component has no boundary vertex. Its rows would
        form a singular system with zero right-hand side.

    Returns
    -------
    A : ~scipy.sparse.csc_matrix, shape (n, n)
        System matrix, not symmetric in the presence of boundary rows.
    B : ~numpy.ndarray, shape (n, 3)
        Right-hand side.
    """
    n = len(mesh.vertices)

    if len(reference.vertices) != n:
        msg = (f'reference mesh has {len(reference.vertices)} vertices, ' +
               f'expected {n}')
        raise ValueError(msg)

    free = _unconstrained(mesh)

    if free:
        raise sparse.SolverError(f'minimal surface: {len(free)} vertices ' +
                                 'in components without boundary vertex')

    if w is None:
        w = weights.compute_weights(mesh)

    A = sparse.Triplets((n, n))
    B = np.zeros((n, 3))

    for v in mesh.vertices:
        if v.boundary:
            A.append(v, v, 1.0)
            B[v] = reference.points[v]
            continue

        if v.isolated:
            A.append(v, v, 1.0)
            B[v] = v.point
            continue

        ww = 0.0

        for h in v._hiter():
            eweight = w.edge[h._edge]
            ww += eweight

            A.append(v, h._target, -eweight)

        A.append(v, v, ww)

    return A.tocsc(), B


def minimal_surface(mesh, reference, quiet=True):
    """ Discrete minimal surface.

    Interior vertex positions become the harmonic extension of the
    boundary of `reference` with respect to the cotangent Laplacian of
    the current mesh.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh, vertex coordinates are modified in place.
    reference : Mesh
        Mesh with identical connectivity, typically a snapshot taken at
        load time (see :meth:`~fairmesh.hds.Mesh.snapshot`).
    quiet : bool, optional
        Suppress console output. If disabled, the summed vertex area
        (twice the surface area) before solving is reported.

    Raises
    ------
    SolverError
        If the system is singular, e.g. for closed meshes or closed
        components without any boundary vertex.
    """
    CBOLD = '\33[1m'
    CEND = '\33[0m'

    start = perf_counter()
    A, B = minimal_surface_system(mesh, reference)

    if not quiet:
        # Barycentric vertex areas are 1/(2 a_i) and sum to the total area.
        area = 2.0 * traits.surface_area(mesh)
        name = mesh.name or ''

        print(f'minimal surface {CBOLD}{name}{CEND}')
        print(f'\t├─ sum of area: {area:g}')

    X = sparse.solve_general(A, B, what='minimal surface')
    mesh.points[...] = X

    if not quiet:
        print(f'\t└─ done ({perf_counter()-start:.3f} sec)')
