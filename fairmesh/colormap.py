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

""" Color coding of scalar vertex properties.

Scalars are mapped to a five stop color ramp: blue, cyan, green, yellow
and red. Extreme values are discarded before the range of the ramp is
determined, so a few outliers do not wash out the coloring.
"""

import numpy as np


BOUND = 20
""" Default outlier bound, see :func:`color_coding`. """

# color stops of the ramp, evenly spaced over [0, 1]
_RAMP = np.array([[0.0, 0.0, 1.0],
                  [0.0, 1.0, 1.0],
                  [0.0, 1.0, 0.0],
                  [1.0, 1.0, 0.0],
                  [1.0, 0.0, 0.0]])


def value_to_color(value, lo, hi):
    """ Map a scalar to an RGB color.

    The interval ``[lo, hi]`` is split into four equally sized parts,
    color is linearly interpolated between the ramp stops at their
    endpoints. Values below ``lo`` are blue, values above ``hi`` are red.

    Parameters
    ----------
    value : float
        Scalar to map.
    lo, hi : float
        Range of the color ramp.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        RGB color with components in [0, 1].

    Note
    ----
    If the range is empty (``lo == hi``) a value equal to both bounds
    maps to green.
    """
    if value < lo:
        return _RAMP[0].copy()
    if value > hi:
        return _RAMP[-1].copy()
    if hi <= lo:
        return _RAMP[2].copy()

    t = 4.0 * (value - lo) / (hi - lo)
    i = min(int(t), 3)

    return _RAMP[i] + (t - i) * (_RAMP[i+1] - _RAMP[i])


def color_range(values, bound=BOUND):
    """ Range of a scalar field without outliers.

    Values are sorted and ``(len(values) - 1) // bound`` entries are
    discarded at either end.

    Parameters
    ----------
    values : array_like, shape (n, )
        Scalar field.
    bound : int, optional
        Outlier bound, larger values discard fewer entries.

    Returns
    -------
    tuple of float
        Lower and upper end of the range.
    """
    values = np.sort(np.asarray(values, dtype=float))

    if len(values) == 0:
        raise ValueError('cannot compute range of empty array')

    n = len(values) - 1
    i = n // bound
    j = max(n - 1 - i, i)

    return values[i], values[j]


def color_coding(values, bound=BOUND):
    """ Map a scalar vertex property to colors.

    Parameters
    ----------
    values : array_like, shape (n, )
        Scalar field.
    bound : int, optional
        Outlier bound passed to :func:`color_range`.

    Returns
    -------
    ~numpy.ndarray, shape (n, 3)
        RGB colors, one row per entry of `values`.
    """
    values = np.asarray(values, dtype=float)

    if len(values) == 0:
        return np.zeros((0, 3))

    lo, hi = color_range(values, bound)

    return np.array([value_to_color(x, lo, hi) for x in values])
