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

""" Mesh processing session.

A :class:`MeshProcessing` object owns a mesh together with the immutable
snapshot taken when the mesh was loaded. It exposes the smoothing and
fairing operations and keeps derived vertex properties (normals, valence,
curvatures and their color codings) up to date after each of them.

>>> session = MeshProcessing('bunny.obj')               # doctest: +SKIP
>>> session.implicit_smoothing(1e-5)                    # doctest: +SKIP
>>> session.properties['curvature']                     # doctest: +SKIP
"""

import numpy as np

import fairmesh.colormap as colormap
import fairmesh.curvature as curvature
import fairmesh.fairing as fairing
import fairmesh.smoothing as smoothing
import fairmesh.traits as traits
import fairmesh.weights as weights

from fairmesh.hds import Mesh


class MeshProcessing:
    """ Geometry processing session.

    Parameters
    ----------
    mesh : Mesh or str
        A mesh or the name of an OBJ file. A mesh passed in is processed
        in place.
    quiet : bool, optional
        Suppress console output of this session's operations.

    Attributes
    ----------
    properties : dict
        Vertex properties by name: ``'normal'``, ``'valence'``,
        ``'unicurvature'``, ``'curvature'`` and ``'gauss_curvature'``.
    colors : dict
        Color coding of the scalar properties, keyed by property name.
    """

    def __init__(self, mesh, quiet=True):
        CBOLD = '\33[1m'
        CEND = '\33[0m'

        self._quiet = quiet

        if not isinstance(mesh, Mesh):
            mesh = Mesh.read(mesh, quiet=quiet)
        elif not quiet:
            nv, ne, nf = mesh.size
            print(f'mesh {CBOLD}{mesh.name}{CEND}')
            print(f'\t├─ # of vertices: {nv}')
            print(f'\t├─ # of faces: {nf}')
            print(f'\t└─ # of edges: {ne}')

        self._mesh = mesh

        self._center, self._radius = traits.bounding_sphere(mesh.points)

        self.properties = dict()
        self.colors = dict()
        self.compute_mesh_properties()

        # Boundary positions for minimal surface computations.
        self._reference = mesh.snapshot()

    @property
    def mesh(self):
        """ The processed mesh.

        :type: Mesh
        """
        return self._mesh

    @property
    def reference(self):
        """ Read-only copy of the mesh taken at load time.

        :type: Mesh
        """
        return self._reference

    @property
    def center(self):
        """ Centroid of the vertices at load time.

        :type: ~numpy.ndarray
        """
        return self._center

    @property
    def radius(self):
        """ Maximal distance of a vertex to :attr:`center` at load time.

        :type: float
        """
        return self._radius

    def compute_mesh_properties(self):
        """ Recompute all vertex properties and color codings.
        """
        mesh = self._mesh
        w = weights.compute_weights(mesh)

        self.properties['normal'] = traits.vertex_normals(mesh)
        self.properties['valence'] = traits.valences(mesh)
        self.properties['unicurvature'] = curvature.uniform_mean_curvature(
            mesh)
        self.properties['curvature'] = curvature.mean_curvature(mesh, w)
        self.properties['gauss_curvature'] = curvature.gauss_curvature(
            mesh, w.vertex)

        for key in ('unicurvature', 'curvature', 'gauss_curvature'):
            self.colors[key] = colormap.color_coding(self.properties[key])

        # Valence varies little, only discard the extreme outliers.
        self.colors['valence'] = colormap.color_coding(
            self.properties['valence'], bound=100)

    def implicit_smoothing(self, timestep):
        """ One implicit mean curvature flow step.

        See :func:`fairmesh.fairing.implicit_smooth`.
        """
        fairing.implicit_smooth(self._mesh, timestep, quiet=self._quiet)
        self.compute_mesh_properties()

    def minimal_surface(self):
        """ Minimal surface spanned by the boundary at load time.

        See :func:`fairmesh.fairing.minimal_surface`.
        """
        fairing.minimal_surface(self._mesh, self._reference,
                                quiet=self._quiet)
        self.compute_mesh_properties()

    def uniform_smooth(self, iterations):
        """ Uniform Laplacian smoothing.

        See :func:`fairmesh.smoothing.uniform_smooth`.
        """
        smoothing.uniform_smooth(self._mesh, iterations, quiet=self._quiet)
        self.compute_mesh_properties()

    def smooth(self, iterations):
        """ Cotangent weighted Laplacian smoothing.

        See :func:`fairmesh.smoothing.smooth`.
        """
        smoothing.smooth(self._mesh, iterations, quiet=self._quiet)
        self.compute_mesh_properties()

    def uniform_laplacian_enhance_feature(self, iterations, coefficient):
        """ Feature enhancement on top of uniform smoothing.

        See :func:`fairmesh.smoothing.enhance`.
        """
        smoothing.enhance(self._mesh, iterations, coefficient, 'uniform',
                          quiet=self._quiet)
        self.compute_mesh_properties()

    def laplace_beltrami_enhance_feature(self, iterations, coefficient):
        """ Feature enhancement on top of cotangent weighted smoothing.

        See :func:`fairmesh.smoothing.enhance`.
        """
        smoothing.enhance(self._mesh, iterations, coefficient, 'cotan',
                          quiet=self._quiet)
        self.compute_mesh_properties()

    def closest_vertex(self, origin, direction):
        """ Position of the vertex closest to a ray.

        Parameters
        ----------
        origin : array_like, shape (3, )
            Ray origin.
        direction : array_like, shape (3, )
            Ray direction.

        Returns
        -------
        ~numpy.ndarray, shape (3, )
            Coordinates of the closest vertex.
        """
        return np.copy(traits.closest_vertex(self._mesh, origin,
                                             direction).point)
