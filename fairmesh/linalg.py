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

""" Vector math for one-ring computations.

Non-vectorized helpers for vectors in 3-space. Weight and curvature loops
visit one triangle or one edge at a time, where these are faster than the
vectorized NumPy counterparts.
"""

import math
import numpy as np


EPS = 1e-12
""" Degeneracy threshold.

Cross product norms, edge lengths, area sums and weight sums below this
value are treated as zero. Contributions of such degenerate items are
skipped instead of dividing by (almost) zero.
"""


def clamp(x, lo, hi):
    """ Restrict `x` to the interval [`lo`, `hi`].

    Parameters
    ----------
    x : float
        Value to clamp.
    lo : float
        Lower bound.
    hi : float
        Upper bound.

    Returns
    -------
    float
        Clamped value.
    """
    assert lo <= hi

    # Argument order keeps the type of x if it is within bounds.
    return max(min(x, hi), lo)


def cross(u, v):
    r""" Cross product of two 3-vectors.

    Much faster than :func:`numpy.cross` for a single pair of vectors.

    Parameters
    ----------
    u, v : array_like, shape (3, )
        Factors.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        The vector :math:`\mathbf{u} \times \mathbf{v}`.
    """
    # Unpacking also catches any problem with array shape.
    u0, u1, u2 = u
    v0, v1, v2 = v

    return np.array([u1*v2 - u2*v1,
                     u2*v0 - u0*v2,
                     u0*v1 - u1*v0])


def dot(u, v):
    """ Dot product of two 3-vectors.

    Parameters
    ----------
    u, v : array_like, shape (3, )
        Factors.

    Returns
    -------
    float
    """
    return u[0]*v[0] + u[1]*v[1] + u[2]*v[2]


def norm(u):
    """ Euclidean length.

    Parameters
    ----------
    u : ~numpy.ndarray, shape (n, )
        A vector.

    Returns
    -------
    float
    """
    return math.sqrt(u.dot(u))


def unit(u):
    """ Unit vector in the direction of `u`.

    Parameters
    ----------
    u : ~numpy.ndarray, shape (3, )
        A vector.

    Returns
    -------
    ~numpy.ndarray or None
        Normalized copy of the input vector, :obj:`None` if the length
        of `u` is below :data:`EPS`.
    """
    length = norm(u)

    if length < EPS:
        return None

    return u / length


def angle(v, w):
    r""" Unsigned angle in radians.

    Arc cosine of the inner product of the normalized vectors. The inner
    product is clamped to [-1, 1] against round-off.

    Parameters
    ----------
    v, w : ~numpy.ndarray, shape (3, )
        Legs of the angle.

    Returns
    -------
    float
        Angle in the range :math:`[0, \pi]`. Zero if one of the vectors
        is degenerate.
    """
    v = unit(v)
    w = unit(w)

    if v is None or w is None:
        return 0.0

    return math.acos(clamp(dot(v, w), -1.0, 1.0))


def cotan(d0, d1):
    r""" Cotangent of the angle between two vectors.

    Evaluated as :math:`\mathbf{d}_0^T \mathbf{d}_1 / \| \mathbf{d}_0
    \times \mathbf{d}_1 \|` without any trigonometric function.

    Parameters
    ----------
    d0, d1 : ~numpy.ndarray, shape (3, )
        Vectors spanning the angle.

    Returns
    -------
    float
        Cotangent value, negative for obtuse angles. Zero for (almost)
        collinear vectors.
    """
    area = norm(cross(d0, d1))

    if area < EPS:
        return 0.0

    return dot(d0, d1) / area
