import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from coilcombine import coils, simulation
from coilcombine.errors import ShapeMismatchError


@pytest.fixture
def csm():
    return simulation.generate_birdcage_sensitivities(matrix_size=32, number_of_coils=4)


@pytest.fixture
def disk():
    return simulation.generate_disk_object(matrix_size=32, radius=0.6)


@pytest.fixture
def fieldmap():
    # linear off-resonance ramp along x, in Hz
    return np.tile(np.linspace(-40.0, 40.0, 32), (32, 1))


class TestBirdcageSensitivities:
    def test_shape_and_dtype(self, csm):
        assert csm.shape == (32, 32, 4)
        assert csm.dtype == np.complex64

    def test_normalized(self, csm):
        rss = np.sqrt(np.sum(np.abs(csm) ** 2, axis=-1))
        assert_allclose(rss, 1.0, rtol=1e-5)

    def test_unnormalized_coils_differ(self):
        csm = simulation.generate_birdcage_sensitivities(matrix_size=16, number_of_coils=2, normalize=False)
        assert np.all(np.isfinite(csm))
        assert not np.allclose(np.abs(csm[..., 0]), np.abs(csm[..., 1]))


class TestDiskObject:
    def test_values(self, disk):
        assert disk.shape == (32, 32)
        assert set(np.unique(disk)) == {0.0, 1.0}
        assert disk[16, 16] == 1
        assert disk[0, 0] == 0


class TestMultiechoData:
    def test_shape(self, disk, csm, fieldmap):
        ydata = simulation.generate_multiecho_data(disk, csm, [0.002, 0.004, 0.006], fieldmap)
        assert ydata.shape == (32, 32, 4, 3)
        assert ydata.dtype == np.complex64

    def test_no_fieldmap_repeats_echoes(self, disk, csm):
        ydata = simulation.generate_multiecho_data(disk, csm, [0.001, 0.003])
        assert_allclose(ydata[..., 0], ydata[..., 1])
        assert_allclose(ydata[..., 0], disk[..., np.newaxis] * csm, rtol=1e-6)

    def test_csm_mismatch(self, disk, csm):
        with pytest.raises(ShapeMismatchError):
            simulation.generate_multiecho_data(disk[:16], csm, [0.001])

    def test_fieldmap_mismatch(self, disk, csm):
        with pytest.raises(ValueError, match="fieldmap shape"):
            simulation.generate_multiecho_data(disk, csm, [0.001], np.zeros((4, 4)))

    def test_empty_echo_times(self, disk, csm):
        with pytest.raises(ValueError, match="echo_times"):
            simulation.generate_multiecho_data(disk, csm, [])


class TestCombineSimulatedData:
    echo_times = [0.002, 0.004, 0.006]

    def test_weighted_recovers_object(self, disk, csm, fieldmap):
        ydata = simulation.generate_multiecho_data(disk, csm, self.echo_times, fieldmap)
        zdata, sos = coils.weighted_combine(ydata, csm)
        assert_allclose(sos, 1.0, rtol=1e-5)
        expected = disk[..., np.newaxis] * np.exp(2j * np.pi * fieldmap[..., np.newaxis] * np.array(self.echo_times))
        assert_allclose(zdata, expected, atol=1e-5)

    def test_self_weighted_removes_coil_phase(self, disk, csm, fieldmap):
        ydata = simulation.generate_multiecho_data(disk, csm, self.echo_times, fieldmap)
        zdata, sos = coils.self_weighted_combine(ydata)
        assert_allclose(sos, disk, atol=1e-5)
        assert_array_equal(zdata[disk == 0], 0)

        delta_te = np.array(self.echo_times) - self.echo_times[0]
        expected = disk[..., np.newaxis] * np.exp(2j * np.pi * fieldmap[..., np.newaxis] * delta_te)
        assert_allclose(zdata, expected, atol=1e-5)

    def test_field_map_from_echo_difference(self, disk, csm, fieldmap):
        ydata = simulation.generate_multiecho_data(disk, csm, self.echo_times[:2], fieldmap)
        for smap in (csm, None):
            zdata, _ = coils.coil_combine(ydata, smap)
            dphase = np.angle(zdata[..., 1] * np.conj(zdata[..., 0]))
            estimate = dphase / (2 * np.pi * (self.echo_times[1] - self.echo_times[0]))
            assert_allclose(estimate[disk > 0], fieldmap[disk > 0], atol=1e-2)
