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

""" Wavefront OBJ codec.

Minimal reader and writer for the subset of the OBJ format needed to
exchange triangle meshes: 'v' lines (vertex coordinates) and 'f' lines
(face definitions). Other statements are skipped when reading.
"""

import numpy as np


def _parse(block):
    """ Vertex reference of a face statement.

    Parameters
    ----------
    block : str
        One of 'v', 'v/vt', 'v//vn', or 'v/vt/vn'.

    Raises
    ------
    ValueError
        If the block is malformed.

    Returns
    -------
    int
        Vertex reference as written in the file, 1-based if positive and
        relative to the last vertex read if negative.
    """
    bits = block.split('/')

    if len(bits) > 3:
        raise ValueError('invalid vertex reference: ' + block)

    return int(bits[0])


def read(filename):
    """ Read vertices and faces.

    Parameters
    ----------
    filename : str
        Name of an OBJ file.

    Raises
    ------
    ValueError
        If the file contents cannot be parsed.

    Returns
    -------
    points : ~numpy.ndarray, shape (n, 3) or None
        Vertex coordinates, :obj:`None` if the file has no 'v' lines.
    faces : list[list[int]]
        Face definitions with 0-based vertex indices.


    Negative vertex references are resolved against the number of
    vertices read so far:

    >>> points, faces = read('input-file.obj')          # doctest: +SKIP
    """
    points = []
    faces = []

    with open(filename, 'r') as file:
        for lineno, line in enumerate(file, 1):
            blocks = line.split()

            if not blocks:
                continue

            if blocks[0] == 'v':
                if len(blocks) < 4:
                    raise ValueError(f'line {lineno}: vertex needs three ' +
                                     'coordinates')

                points.append([float(x) for x in blocks[1:4]])
            elif blocks[0] == 'f':
                face = [_parse(block) for block in blocks[1:]]
                faces.append([len(points) + v if v < 0 else v - 1
                              for v in face])

    if not points:
        return None, faces

    return np.array(points, dtype=float), faces


def write(filename, points, faces=()):
    """ Write vertices and faces.

    Coordinates are written with full precision, reading the file back
    reproduces them exactly.

    Parameters
    ----------
    filename : str
        Name of output file.
    points : array_like, shape (n, 3)
        Vertex coordinates.
    faces : iterable, optional
        Face definitions, 0-based vertex indices.
    """
    with open(filename, 'w') as file:
        for p in points:
            file.write('v ' + ' '.join(repr(float(x)) for x in p) + '\n')

        for face in faces:
            file.write('f ' + ' '.join(str(int(v) + 1) for v in face) + '\n')
