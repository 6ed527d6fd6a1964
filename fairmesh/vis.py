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

""" Visualization using VTK.

Conversion of meshes and vertex properties to `VTK
<https://vtk.org/doc/nightly/html>`_ data structures and a minimal
interactive viewer. Not meant as a full featured set of visualization
routines, just enough to inspect the results of smoothing and fairing
operations.

This module can also be used as a stand-alone command line tool:

>>> python -m fairmesh.vis file.obj --smooth 10 --curvature gauss_curvature

loads `file.obj`, applies ten iterations of cotangent smoothing and opens a
graphics window that shows the mesh colored by Gaussian curvature.
"""

import numpy as np
import vtk

from vtk.util.colors import black, ivory_black, snow, white
from vtk.util.numpy_support import numpy_to_vtk

from fairmesh.processing import MeshProcessing
from fairmesh.sparse import SolverError


def polydata(mesh, scalars=None, colors=None, normals=None):
    """ Convert mesh to VTK poly data.

    Parameters
    ----------
    mesh : Mesh
        A mesh.
    scalars : array_like, shape (n, ), optional
        Scalar vertex property, mapped to colors by a lookup table.
    colors : array_like, shape (n, 3), optional
        RGB vertex colors with components in [0, 1]. Take precedence over
        `scalars` for rendering.
    normals : array_like, shape (n, 3), optional
        Vertex normals, result in smooth shading.

    Returns
    -------
    vtkPolyData
        Poly data holding a copy of the vertex coordinates.
    """
    data = vtk.vtkPolyData()

    points = vtk.vtkPoints()
    points.SetData(numpy_to_vtk(np.array(mesh.points), deep=True))
    data.SetPoints(points)

    cells = vtk.vtkCellArray()

    for f in mesh.faces:
        face = vtk.vtkIdList()

        for v in f:
            face.InsertNextId(int(v))

        cells.InsertNextCell(face)

    data.SetPolys(cells)

    pdata = data.GetPointData()

    if scalars is not None:
        array = numpy_to_vtk(np.asarray(scalars, dtype=float), deep=True)
        array.SetName('scalars')
        pdata.AddArray(array)
        pdata.SetActiveScalars('scalars')

    if colors is not None:
        rgb = np.round(255.0 * np.clip(colors, 0.0, 1.0)).astype(np.uint8)

        array = numpy_to_vtk(rgb, deep=True)
        array.SetName('colors')
        pdata.AddArray(array)
        pdata.SetActiveScalars('colors')

    if normals is not None:
        pdata.SetNormals(numpy_to_vtk(np.asarray(normals, dtype=float),
                                      deep=True))

    return data


def lookuptable(range=(0.0, 1.0), gradient='jet', size=128):
    """ Generate lookup table.

    Lookup table with `size` values in the given `range`. Gradient
    values drawn from

        {'default', 'hot', 'jet', 'grey'}

    generate a continuous color gradient. The 'jet' gradient runs from
    blue to red like :func:`fairmesh.colormap.value_to_color`.

    Parameters
    ----------
    range : (float, float), optional
        Range of table values.
    gradient : str, optional
        Name of color gradient.
    size : int, optional
        Number of table values.

    Raises
    ------
    ValueError
        For unknown gradient names.

    Returns
    -------
    vtkLookupTable
        The generated lookup table.
    """
    if gradient not in {'default', 'hot', 'jet', 'grey', 'gray'}:
        raise ValueError(f"unknown color scheme '{gradient}'")

    lut = vtk.vtkLookupTable()
    lut.SetNumberOfTableValues(size)

    if gradient == 'hot':
        lut.SetHueRange(0, 1/6)
        lut.SetSaturationRange(1, 0.5)
        lut.SetValueRange(1, 1)
    elif gradient == 'jet':
        lut.SetHueRange(2/3, 0)
        lut.SetSaturationRange(1, 1)
        lut.SetValueRange(1, 1)
    elif gradient == 'grey' or gradient == 'gray':
        lut.SetHueRange(0, 0)
        lut.SetSaturationRange(0, 0)
        lut.SetValueRange(0, 1)

    lut.Build()
    lut.SetTableRange(range[0], range[1])

    return lut


def show(mesh, scalars=None, colors=None, normals=None, *, edges=False,
         width=1200, height=600, title=None):
    """ Display a mesh.

    Opens a window and starts the VTK event loop. This is a blocking
    function, it returns once the window is closed.

    Parameters
    ----------
    mesh : Mesh
        A mesh.
    scalars : array_like, shape (n, ), optional
        Scalar vertex property shown with a color bar.
    colors : array_like, shape (n, 3), optional
        RGB vertex colors.
    normals : array_like, shape (n, 3), optional
        Vertex normals.
    edges : bool, optional
        Render mesh edges.
    width : int, optional
        Window width in pixels.
    height : int, optional
        Window height in pixels.
    title : str, optional
        Window title, defaults to the name of the mesh.
    """
    mapper = vtk.vtkPolyDataMapper()
    mapper.SetInputData(polydata(mesh, scalars, colors, normals))

    renderer = vtk.vtkRenderer()
    renderer.SetBackground(white)
    renderer.SetBackground2(black)
    renderer.GradientBackgroundOn()

    if colors is not None:
        # Colors are stored as unsigned chars and used as is.
        mapper.SetColorModeToDirectScalars()
        mapper.SetScalarVisibility(True)
    elif scalars is not None:
        scalars = np.asarray(scalars, dtype=float)

        mapper.SetLookupTable(lookuptable((scalars.min(), scalars.max())))
        mapper.SetUseLookupTableScalarRange(True)
        mapper.SetScalarVisibility(True)

        bar = vtk.vtkScalarBarActor()
        bar.SetLookupTable(mapper.GetLookupTable())
        bar.SetNumberOfLabels(5)
        bar.SetPosition(0.9, 0.1)
        bar.SetWidth(0.08)

        renderer.AddActor2D(bar)
    else:
        mapper.SetScalarVisibility(False)

    actor = vtk.vtkActor()
    actor.SetMapper(mapper)
    actor.GetProperty().SetColor(snow)

    if edges:
        actor.GetProperty().EdgeVisibilityOn()
        actor.GetProperty().SetEdgeColor(ivory_black)

    renderer.AddActor(actor)
    renderer.ResetCamera()

    renwin = vtk.vtkRenderWindow()
    renwin.SetSize(width, height)
    renwin.AddRenderer(renderer)
    renwin.SetWindowName(str(mesh.name if title is None else title))

    iren = vtk.vtkRenderWindowInteractor()
    iren.SetRenderWindow(renwin)
    iren.SetInteractorStyle(vtk.vtkInteractorStyleTrackballCamera())

    renwin.Render()
    iren.Start()


def _main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(prog='python -m fairmesh.vis')
    parser.add_argument('file', type=str, help='OBJ input file')
    parser.add_argument('--curvature', default='curvature',
                        choices=['valence', 'unicurvature', 'curvature',
                                 'gauss_curvature'],
                        help='vertex property used for coloring')
    parser.add_argument('--uniform-smooth', type=int, metavar='N',
                        help='uniform Laplacian smoothing iterations')
    parser.add_argument('--smooth', type=int, metavar='N',
                        help='cotangent Laplacian smoothing iterations')
    parser.add_argument('--implicit', type=float, metavar='DT',
                        help='implicit smoothing time step')
    parser.add_argument('--minimal', action='store_true',
                        help='compute minimal surface')
    parser.add_argument('--uniform-enhance', nargs=2, metavar=('N', 'COEFF'),
                        help='uniform feature enhancement')
    parser.add_argument('--enhance', nargs=2, metavar=('N', 'COEFF'),
                        help='cotangent feature enhancement')
    parser.add_argument('--output', type=str, help='OBJ output file')
    parser.add_argument('--edges', action='store_true', help='show edges')
    parser.add_argument('--no-show', action='store_true',
                        help='do not open a window')

    args = parser.parse_args(argv)
    session = MeshProcessing(args.file, quiet=False)

    if args.uniform_smooth is not None:
        session.uniform_smooth(args.uniform_smooth)

    if args.smooth is not None:
        session.smooth(args.smooth)

    try:
        if args.implicit is not None:
            session.implicit_smoothing(args.implicit)

        if args.minimal:
            session.minimal_surface()
    except SolverError as e:
        parser.exit(1, f'{parser.prog}: error: {e}\n')

    if args.uniform_enhance is not None:
        iterations, coefficient = args.uniform_enhance
        session.uniform_laplacian_enhance_feature(int(iterations),
                                                  float(coefficient))

    if args.enhance is not None:
        iterations, coefficient = args.enhance
        session.laplace_beltrami_enhance_feature(int(iterations),
                                                 float(coefficient))

    if args.output is not None:
        session.mesh.write(args.output, quiet=False)

    if not args.no_show:
        show(session.mesh, colors=session.colors[args.curvature],
             normals=session.properties['normal'], edges=args.edges)


if __name__ == '__main__':
    _main()
