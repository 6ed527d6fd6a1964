import numpy as np
import pytest

vtk = pytest.importorskip('vtk')

import fairmesh.vis as vis                                       # noqa: E402

from fairmesh.hds import Mesh                                    # noqa: E402


def test_polydata(disk):
    data = vis.polydata(disk)

    assert data.GetNumberOfPoints() == 16
    assert data.GetNumberOfPolys() == 20


def test_polydata_attributes(disk):
    n = len(disk.vertices)
    colors = np.tile([1.0, 0.5, 0.0], (n, 1))

    data = vis.polydata(disk, scalars=np.arange(n), colors=colors,
                        normals=np.tile([0.0, 0.0, 1.0], (n, 1)))
    pdata = data.GetPointData()

    assert pdata.GetArray('scalars').GetNumberOfTuples() == n
    assert pdata.GetScalars().GetName() == 'colors'
    assert pdata.GetScalars().GetTuple3(0) == (255.0, 128.0, 0.0)
    assert pdata.GetNormals() is not None


def test_lookuptable():
    lut = vis.lookuptable((-1.0, 2.0), gradient='hot')

    assert lut.GetTableRange() == (-1.0, 2.0)

    with pytest.raises(ValueError):
        vis.lookuptable(gradient='rainbow')


def test_main(disk, tmp_path, capsys):
    infile = tmp_path / 'disk.obj'
    outfile = tmp_path / 'flat.obj'
    disk.write(infile)

    vis._main([str(infile), '--smooth', '2', '--minimal',
               '--output', str(outfile), '--no-show'])

    mesh = Mesh.read(outfile)

    assert mesh.size == disk.size
    np.testing.assert_allclose(mesh.points[:, 2], 0.0, atol=1e-10)
    assert 'sum of area' in capsys.readouterr().out


def test_main_solver_error(octahedron, tmp_path, capsys):
    infile = tmp_path / 'octahedron.obj'
    octahedron.write(infile)

    with pytest.raises(SystemExit) as info:
        vis._main([str(infile), '--minimal', '--no-show'])

    assert info.value.code == 1
    assert 'error: minimal surface' in capsys.readouterr().err


def test_main_uniform_enhance(bumped_grid, tmp_path):
    infile = tmp_path / 'grid.obj'
    outfile = tmp_path / 'enhanced.obj'
    bumped_grid.write(infile)

    vis._main([str(infile), '--uniform-enhance', '4', '1.0',
               '--output', str(outfile), '--no-show'])

    mesh = Mesh.read(outfile)

    np.testing.assert_allclose(mesh.points, bumped_grid.points, atol=1e-12)
