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

""" Explicit smoothing and feature enhancement.

Iterative Laplacian relaxation. Each iteration computes the displacement
of every vertex from the positions at the start of the iteration and then
moves all vertices at once (Jacobi update), hence the result does not
depend on the order in which vertices are visited. Boundary vertices do
not move.

Feature enhancement amplifies the difference between a mesh and its
smoothed version (unsharp masking).
"""

import numpy as np

import fairmesh.curvature as curvature
import fairmesh.weights as weights


DAMPING = 0.5
""" Fraction of the Laplacian applied per iteration. """


def _check_iterations(iterations):
    if iterations < 0:
        raise ValueError(f'number of iterations must be non-negative, ' +
                         f'got {iterations}')


def uniform_smooth(mesh, iterations, quiet=True):
    """ Uniform Laplacian smoothing.

    Each interior vertex is moved by ``DAMPING`` times the average of
    the vectors pointing to its neighbors.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh, vertex coordinates are modified in place.
    iterations : int
        Number of smoothing iterations. Zero leaves the mesh unchanged.
    quiet : bool, optional
        Suppress console output.
    """
    _check_iterations(iterations)

    for _ in range(iterations):
        # The Laplacian is computed from old positions only. All new
        # positions are committed in one assignment.
        mesh.points += DAMPING * curvature.uniform_laplacian(mesh)

    if not quiet:
        print(f'uniform smoothing, {iterations} iterations')


def smooth(mesh, iterations, quiet=True):
    """ Cotangent weighted Laplacian smoothing.

    Same as :func:`uniform_smooth` but neighbors are weighted by cotangent
    edge weights normalized by their one-ring sum. Edge weights are
    recomputed in every iteration.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh, vertex coordinates are modified in place.
    iterations : int
        Number of smoothing iterations. Zero leaves the mesh unchanged.
    quiet : bool, optional
        Suppress console output.
    """
    _check_iterations(iterations)

    for _ in range(iterations):
        edge_weights = weights.edge_weights(mesh)
        mesh.points += DAMPING * curvature.cotan_laplacian(mesh,
                                                           edge_weights)

    if not quiet:
        print(f'cotangent smoothing, {iterations} iterations')


_SMOOTHERS = {'uniform': uniform_smooth, 'cotan': smooth}


def enhance(mesh, iterations, coefficient, smoother='uniform', quiet=True):
    r""" Laplacian feature enhancement.

    With :math:`p` the original and :math:`s` the smoothed position of a
    vertex, its new position is :math:`s + c (p - s)`. A coefficient
    :math:`c > 1` amplifies high frequency detail, :math:`c = 1` restores
    the original mesh, and :math:`c = 0` keeps the smoothed mesh.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh, vertex coordinates are modified in place.
    iterations : int
        Number of smoothing iterations.
    coefficient : float
        Non-negative gain :math:`c`.
    smoother : str, optional
        Either 'uniform' or 'cotan'.
    quiet : bool, optional
        Suppress console output.

    Raises
    ------
    ValueError
        For a negative coefficient or an unknown smoother.
    """
    if coefficient < 0.0:
        raise ValueError(f'coefficient must be non-negative, ' +
                         f'got {coefficient}')

    try:
        func = _SMOOTHERS[smoother]
    except KeyError:
        raise ValueError(f"unknown smoother '{smoother}'") from None

    original = np.copy(mesh.points)
    func(mesh, iterations, quiet=quiet)

    mesh.points += coefficient * (original - mesh.points)
