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

""" Halfedge mesh kernel.

Connectivity of an orientable 2-manifold triangle mesh, possibly with
boundary. A :class:`Mesh` owns the vertex coordinate array and three
containers of topological items:

    - vertices (:class:`Vertex`), one per row of the coordinate array,
    - faces (:class:`Face`), in insertion order,
    - halfedges (:class:`Halfedge`), keyed by (origin, target) pairs.

Every pair of opposite halfedges forms an edge with an integer index
assigned in creation order. Vertices, edges, and faces are plain integer
indices from NumPy's point of view, e.g. ``weights[h.edge]`` or
``points[v]``, which is how per-item quantities are stored throughout
this package.

Note
----
Internal consistency is guarded by ``assert`` statements. Run Python with
the "-O" flag to skip them on large meshes.
"""

from pathlib import Path
from time import perf_counter

import numpy as np

import fairmesh.obj as obj


class Mesh:
    """ Triangle mesh.

    Built from a coordinate array and a list of faces, see also
    :meth:`read` for loading OBJ files. Faces are inserted one after
    another, topological errors are detected while inserting.

    Parameters
    ----------
    points : array_like, shape (n, 3)
        Vertex coordinates. Always copied to an owned array of type
        :class:`float`.
    faces : array_like, optional
        Face definitions, 0-based vertex indexing.
    name : str, optional
        Name tag.

    Raises
    ------
    NonManifoldError
        If the faces do not describe a manifold surface.
    ValueError
        If a face definition is invalid.
    """

    def __init__(self, points, faces=None, *, name=None):
        CWHITERED = '\33[41m'
        CEND = '\33[0m'

        self._points = np.array(points, dtype=float)
        self._verts = [Vertex(i, parent=self)
                       for i in range(len(self._points))]

        # Outgoing halfedges per vertex, independent of the face loops.
        self._vhout = {v: set() for v in self._verts}

        # (v, w) -> halfedge, also answers adjacency queries.
        self._halfs = dict()

        # One representative halfedge per edge, in order of edge indices.
        self._edges = []
        self._faces = []

        if faces is not None:
            for face in faces:
                self.add_face(face)

        # Allowed, but most likely an input error.
        if any(v.isolated for v in self._verts):
            print(f'{CWHITERED}there are isolated vertices{CEND}')

        # Circulators rely on a single triangle fan per vertex.
        for v in self._verts:
            if not v._manifold:
                raise NonManifoldError(f'vertex #{v._idx} is non-manifold')

        self.name = name

    def __iter__(self):
        """ Iterate over faces in insertion order.
        """
        return iter(self._faces)

    def __copy__(self):
        return self.copy()

    @property
    def points(self):
        """ Vertex coordinates.

        The array is owned by the mesh and modified in place by all
        smoothing operations. Assigning an array of a different shape
        raises :class:`ValueError`.

        :type: ~numpy.ndarray
        """
        return self._points

    @points.setter
    def points(self, value):
        value = np.asarray(value, dtype=float)

        if value.shape != self._points.shape:
            msg = (f'cannot assign coordinates of shape {value.shape} ' +
                   f'to mesh with coordinates of shape {self._points.shape}')
            raise ValueError(msg)

        self._points[...] = value

    @property
    def vertices(self):
        """ Vertices, ordered by index.

        Do not modify.

        :type: list[Vertex]
        """
        return self._verts

    @property
    def faces(self):
        """ Faces, ordered by index.

        Vertex index lists are recovered by

        >>> [[int(v) for v in f] for f in mesh.faces]

        :type: list[Face]
        """
        return self._faces

    @property
    def halfedges(self):
        """ Halfedges keyed by vertex pairs.

        ``mesh.halfedges[v, w]`` is the halfedge from `v` to `w` and
        raises :class:`KeyError` if the vertices are not adjacent.

        :type: dict
        """
        return self._halfs

    @property
    def edges(self):
        """ Edge list.

        One representative halfedge per edge. The position of a halfedge
        in this list equals the value of its :attr:`Halfedge.edge`
        attribute.

        :type: list[Halfedge]
        """
        return self._edges

    @property
    def size(self):
        """ Number of vertices, edges, and faces.

        :type: (int, int, int)
        """
        assert len(self._halfs) == 2 * len(self._edges)

        return len(self._verts), len(self._edges), len(self._faces)

    @property
    def name(self):
        """ Name tag, the stem of the file name for meshes read from disk.

        :type: str
        """
        return self._name

    @name.setter
    def name(self, value):
        self._name = value if value is None else Path(value).stem

    @classmethod
    def read(cls, filename, quiet=True):
        """ Read mesh from file.

        Only `v` and `f` statements are used, texture coordinates and
        normals referenced by faces are ignored.

        Parameters
        ----------
        filename : str
            Name of an OBJ file.
        quiet : bool, optional
            Suppress console output.

        Raises
        ------
        OSError
            If the file cannot be opened.
        ValueError
            If the file contents cannot be parsed or do not define
            a valid mesh.

        Returns
        -------
        Mesh
            Mesh named after the stem of `filename`.
        """
        CBOLD = '\33[1m'
        CEND = '\33[0m'

        if not quiet:
            start = perf_counter()
            print(f'reading {CBOLD}{Path(filename).name}{CEND}', end=' ...')

        verts, faces = obj.read(filename)

        if verts is None:
            raise ValueError(f"no vertices found in '{filename}'")

        mesh = cls(verts, faces, name=filename)

        if not quiet:
            v, e, f = mesh.size

            print(f' done ({perf_counter()-start:.3f} sec)')
            print(f'\t├─ {v} vertices')
            print(f'\t├─ {e} edges')
            print(f'\t└─ {f} faces')

        return mesh

    def write(self, filename, quiet=True):
        """ Write mesh to file.

        Parameters
        ----------
        filename : str
            Name of an OBJ file.
        quiet : bool, optional
            Suppress console output.
        """
        CBOLD = '\33[1m'
        CEND = '\33[0m'

        if not quiet:
            start = perf_counter()
            print(f'writing {CBOLD}{Path(filename).name}{CEND}', end=' ...')

        obj.write(filename, self._points, ([int(v) for v in f] for f in self))

        if not quiet:
            print(f' done ({perf_counter()-start:.3f} sec)')

    def copy(self):
        """ Mesh copy.

        Duplicate the mesh combinatorics and vertex coordinates. Faces are
        re-inserted in the same order, hence vertex, edge, and face indices
        of the copy agree with those of the original mesh.

        Returns
        -------
        Mesh
            Independent copy of the mesh.
        """
        return self.__class__(self._points,
                              [[int(v) for v in f] for f in self],
                              name=self._name)

    def snapshot(self):
        """ Read-only mesh copy.

        Same as :meth:`copy` but the vertex coordinate array of the
        returned mesh is not writeable. Used to keep the geometry of
        a mesh at load time around.

        Returns
        -------
        Mesh
            Copy of the mesh with frozen vertex coordinates.
        """
        mesh = self.copy()
        mesh._points.flags.writeable = False

        return mesh

    def add_face(self, face):
        """ Insert a face.

        A face that reuses a halfedge of an existing face is rejected
        before the mesh is modified.

        Parameters
        ----------
        face : list[int] or list[Vertex]
            Vertex loop, counter-clockwise when seen from the front side.

        Raises
        ------
        NonManifoldError
            If the face would create a non-manifold edge or vertex.
        IndexError
            For vertex indices out of range.
        ValueError
            For repeated vertices or less than three vertices.

        Returns
        -------
        Face
            The new face.
        """
        face = [int(v) for v in face]
        n = len(face)

        # Coinciding coordinates are fine, repeated indices are not.
        if len(set(face)) != n:
            raise ValueError('face contains duplicate vertices')

        if n < 3:
            raise ValueError('face has less than three vertices')

        pairs = [(self._verts[face[k]], self._verts[face[(k + 1) % n]])
                 for k in range(n)]

        # Check all edges first so a rejected face leaves no trace.
        for v, w in pairs:
            h = self._halfs.get((v, w), None)

            if h is not None and h._face is not None:
                msg = f'edge ({v._idx}, {w._idx}) is non-manifold'
                raise NonManifoldError(msg)

        f = Face(len(self._faces))
        loop = [self._add_halfedge(v, w) for v, w in pairs]

        # Halfedges without a pair get a boundary halfedge as pair.
        for h in loop:
            h._face = f
            h._origin._halfedge = h

            if h._pair is None:
                self._add_halfedge(h._target, h._origin)

        self._faces.append(f)
        f._halfedge = loop[0]

        for i in range(n):
            j = (i + 1) % n

            loop[i]._next = loop[j]
            loop[j]._prev = loop[i]

        # Relink boundary loops around each corner of the new face. For
        # h = (v, w) find the boundary halfedge entering v by clockwise
        # rotation, then the boundary halfedge leaving v by counter-
        # clockwise rotation, and connect the two.
        for h in loop:
            incoming = None
            hh = h

            while True:
                if hh._pair._face is None:
                    incoming = hh._pair
                    break

                hh = hh._pair._next

                if hh is h:
                    break

            hh = h

            while incoming is not None:
                hh = hh._prev._pair

                if hh is h:
                    msg = f'vertex #{h._origin._idx} is non-manifold'
                    raise NonManifoldError(msg)

                if hh._face is None:
                    hh._prev = incoming
                    incoming._next = hh

                    break

        return f

    def _add_halfedge(self, v, w):
        """ Halfedge from `v` to `w`, created on demand.

        A new halfedge is linked to its pair, if present, and receives
        an edge index. Face and loop pointers are left to the caller. An
        existing boundary halfedge is returned as is.

        Parameters
        ----------
        v : Vertex
            Origin.
        w : Vertex
            Target.

        Raises
        ------
        NonManifoldError
            If the halfedge exists and already has a face.

        Returns
        -------
        Halfedge
        """
        assert isinstance(v, Vertex) and v._mesh is self
        assert isinstance(w, Vertex) and w._mesh is self

        h = self._halfs.get((v, w), None)

        if h is not None:
            if h._face is not None:
                msg = f'edge ({v._idx}, {w._idx}) is non-manifold'
                raise NonManifoldError(msg)

            return h

        h = Halfedge(v, w)
        h._pair = self._halfs.get((w, v), None)

        # The first halfedge of an edge allocates the edge index.
        if h._pair is None:
            h._edge = len(self._edges)
            self._edges.append(h)
        else:
            h._pair._pair = h
            h._edge = h._pair._edge

        self._halfs[v, w] = h
        self._vhout[v].add(h)

        return h

    def _viter(self):
        return iter(self._verts)

    def _fiter(self):
        return iter(self._faces)

    def _hiter(self):
        return iter(self._halfs.values())

    def _eiter(self):
        return iter(self._edges)


class Vertex:
    """ Mesh vertex.

    A thin handle: coordinates live in the coordinate array of the parent
    mesh and are reached through :attr:`point`.

    Parameters
    ----------
    index : int
        Vertex index.
    parent : Mesh
        Owner of the vertex.

    Note
    ----
    Vertices implement :meth:`~object.__index__`, so ``array[v]`` selects
    the row of vertex `v` in any per-vertex array.
    """

    def __init__(self, index, parent):
        self._idx = index
        self._mesh = parent
        self._halfedge = None

    def __repr__(self):
        return f'Vertex({self._idx})'

    def __str__(self):
        return f'v {self._idx} {self.point}'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    @property
    def index(self):
        """ Row of the vertex in the coordinate array.

        :type: int
        """
        return self._idx

    @property
    def point(self):
        """ Vertex coordinates.

        View of the corresponding row of the mesh's coordinate array.

        :type: ~numpy.ndarray
        """
        return self._mesh._points[self._idx, ...]

    @point.setter
    def point(self, value):
        self._mesh._points[self._idx, ...] = value

    @property
    def halfedge(self):
        """ Some halfedge leaving the vertex.

        Start of one-ring traversals, :obj:`None` for isolated vertices.

        :type: Halfedge
        """
        return self._halfedge

    @property
    def degree(self):
        """ Valence, the number of neighbors.

        :type: int
        """
        return len(self._mesh._vhout[self])

    @property
    def boundary(self):
        """ True if an outgoing halfedge has no face.

        Isolated vertices are not on the boundary.

        :type: bool
        """
        return any(h._face is None for h in self._hiter())

    @property
    def isolated(self):
        """ True if no face uses the vertex.

        :type: bool
        """
        assert self._halfedge is not None or not self._mesh._vhout[self]

        return self._halfedge is None

    @property
    def _manifold(self):
        """ True if the vertex is surrounded by a single triangle fan.

        Isolated vertices count as manifold.

        :type: bool
        """
        # Circulating from self.halfedge would only ever see one fan.
        halfs = self._mesh._vhout[self]

        if not halfs:
            return True

        # Walk face to face across outgoing halfedges. A closed fan has
        # no gap, an open fan exactly one (two None entries).
        faces = [h._face for h in halfs] + [h._pair._face for h in halfs]
        count = faces.count(None)

        if count == 0 or count == 2:
            fmap = {h._face: h._pair._face for h in halfs}
            loop = [faces[0]] if count == 0 else [None]

            while fmap:
                loop.append(fmap.pop(loop[-1]))

                if loop[0] is loop[-1]:
                    break

            if loop[0] is loop[-1] and not fmap:
                return True

        return False

    def _viter(self):
        """ One-ring neighbors.
        """
        for h in self._hiter():
            yield h._target

    def _fiter(self):
        """ Faces around the vertex.
        """
        for h in self._hiter():
            if h._face is not None:
                yield h._face

    def _hiter(self):
        """ Outgoing halfedges, rotating via ``h.prev.pair``.
        """
        h = self._halfedge

        if h is None:
            return

        while True:
            yield h
            h = h._prev._pair

            if h is self._halfedge:
                return


class Halfedge:
    """ Directed edge.

    Each halfedge belongs to the face on its left, or to no face at all on
    the boundary. Halfedges of a face are linked by :attr:`next` and
    :attr:`prev`, opposite halfedges by :attr:`pair`.

    Parameters
    ----------
    origin : Vertex
        Start vertex.
    target : Vertex
        End vertex.
    """

    def __init__(self, origin, target):
        self._origin = origin
        self._target = target

        self._next = None
        self._prev = None
        self._pair = None
        self._face = None
        self._edge = None

    def __repr__(self):
        return f'Halfedge({repr(self._origin)}, {repr(self._target)})'

    def __str__(self):
        return f'h ({self._origin._idx}, {self._target._idx})'

    def __iter__(self):
        yield self._origin
        yield self._target

    @property
    def origin(self):
        """ Start vertex.

        :type: Vertex
        """
        return self._origin

    @property
    def target(self):
        """ End vertex.

        :type: Vertex
        """
        return self._target

    @property
    def vector(self):
        """ Edge vector, target minus origin.

        :type: ~numpy.ndarray
        """
        return self._target.point - self._origin.point

    @property
    def next(self):
        """ Successor halfedge.

        :type: Halfedge
        """
        return self._next

    @property
    def prev(self):
        """ Predecessor halfedge.

        :type: Halfedge
        """
        return self._prev

    @property
    def pair(self):
        """ Opposite halfedge.

        :type: Halfedge
        """
        return self._pair

    @property
    def face(self):
        """ Face on the left, :obj:`None` on the boundary.

        :type: Face
        """
        return self._face

    @property
    def edge(self):
        """ Edge index.

        Shared by a halfedge and its pair.

        :type: int
        """
        return self._edge

    @property
    def boundary(self):
        """ True if the halfedge has no face.

        :type: bool
        """
        return self._face is None


class Face:
    """ Mesh face.

    The halfedge loop starting at :attr:`halfedge` runs counter-clockwise
    around the face.

    Parameters
    ----------
    index : int
        Face index.
    """

    def __init__(self, index):
        self._idx = index
        self._halfedge = None

    def __repr__(self):
        return f'Face({self._idx})'

    def __str__(self):
        return f'f {self._idx} {[int(v) for v in self]}'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __len__(self):
        """ Number of corners.
        """
        return sum(1 for _ in self._hiter())

    def __iter__(self):
        """ Corners, starting at the origin of :attr:`halfedge`.
        """
        return self._viter()

    def __array__(self, dtype=None, copy=None):
        """ Corner coordinates, one row per vertex.
        """
        return np.array([v.point for v in self], dtype=dtype)

    @property
    def index(self):
        """ Face index.

        :type: int
        """
        return self._idx

    @property
    def halfedge(self):
        """ First halfedge of the face loop.

        :type: Halfedge
        """
        return self._halfedge

    @property
    def boundary(self):
        """ True if the face has an edge on the boundary.

        :type: bool
        """
        return any(h._pair._face is None for h in self._hiter())

    def _viter(self):
        """ Corners in loop order.
        """
        for h in self._hiter():
            yield h._origin

    def _hiter(self):
        """ Halfedges of the face loop.
        """
        assert self._halfedge is not None

        h = self._halfedge

        while True:
            yield h
            h = h._next

            if h is self._halfedge:
                return


class NonManifoldError(Exception):
    """ Raised when faces do not form a 2-manifold.
    """

    pass
