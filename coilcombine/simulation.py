# -*- coding: utf-8 -*-
"""
Tools for generating coil sensitivities, objects and multi-echo coil data
"""
import numpy as np

from coilcombine.errors import ShapeMismatchError


def generate_birdcage_sensitivities(matrix_size=64, number_of_coils=8, relative_radius=1.5, normalize=True):
    """ Generates birdcage coil sensitivites.

    :param matrix_size: size of imaging matrix in pixels (default ``64``)
    :param number_of_coils: Number of simulated coils (default ``8``)
    :param relative_radius: Relative radius of birdcage (default ``1.5``)
    :param normalize: Scale so the root-sum-of-squares over coils is 1 (default ``True``)

    :returns csm: Coil sensitivities, ``[y, x, coil]``

    This function is heavily inspired by the mri_birdcage.m Matlab script in
    Jeff Fessler's IRT package: http://web.eecs.umich.edu/~fessler/code/
    """

    out = np.zeros((matrix_size, matrix_size, number_of_coils), dtype=np.complex64)
    ygrid, xgrid = np.mgrid[0:matrix_size, 0:matrix_size]
    y_rel = (ygrid - matrix_size/2) / (matrix_size/2)
    x_rel = (xgrid - matrix_size/2) / (matrix_size/2)

    for c in range(number_of_coils):
        coilx = relative_radius*np.cos(c*(2*np.pi/number_of_coils))
        coily = relative_radius*np.sin(c*(2*np.pi/number_of_coils))
        coil_phase = -c*(2*np.pi/number_of_coils)

        x_co = x_rel - coilx
        y_co = y_rel - coily
        rr = np.sqrt(x_co**2 + y_co**2)
        phi = np.arctan2(x_co, -y_co) + coil_phase
        out[..., c] = (1/rr) * np.exp(1j*phi)

    if normalize:
        rss = np.sqrt(np.sum(abs(out) ** 2, axis=-1))
        out = out / rss[..., np.newaxis]

    return out


def generate_disk_object(matrix_size=64, radius=0.6):
    """ Uniform disk in the centre of a ``[-1, 1] x [-1, 1]`` field of view.

    :param matrix_size: size of imaging matrix in pixels (default ``64``)
    :param radius: disk radius relative to half the field of view (default ``0.6``)

    :returns obj: Object image, ``[y, x]``, 1 inside the disk and 0 outside
    """

    ygrid, xgrid = np.mgrid[-1:1:(1j*matrix_size), -1:1:(1j*matrix_size)]
    locs = (xgrid**2 + ygrid**2) <= radius**2
    return locs.astype(np.float32)


def generate_multiecho_data(img_obj, csm, echo_times, fieldmap=None):
    """ Multi-coil, multi-echo images of an object in an off-resonance field.

    Parameters
    ----------
    img_obj : (spatial...) array
        Object in image space.
    csm : (spatial..., coil) array
        Coil sensitivity maps.
    echo_times : sequence of float
        Echo times in seconds.
    fieldmap : (spatial...) array, optional
        Off-resonance in Hz (default zero everywhere).

    Returns
    -------
    ydata : (spatial..., coil, echo) array
        ``img_obj * csm[..., c] * exp(2j * pi * fieldmap * te)``
    """

    img_obj = np.asarray(img_obj)
    csm = np.asarray(csm)
    if csm.shape[:-1] != img_obj.shape:
        raise ShapeMismatchError(csm.shape, img_obj.shape + csm.shape[-1:])

    echo_times = np.atleast_1d(np.asarray(echo_times, dtype=np.float64))
    if echo_times.ndim != 1 or echo_times.size == 0:
        raise ValueError("echo_times must be a non-empty 1D sequence")

    if fieldmap is None:
        fieldmap = np.zeros(img_obj.shape)
    fieldmap = np.asarray(fieldmap)
    if fieldmap.shape != img_obj.shape:
        raise ValueError("fieldmap shape {} does not match object shape {}".format(
            fieldmap.shape, img_obj.shape))

    coil_images = img_obj[..., np.newaxis] * csm
    phase = np.exp(2j*np.pi*fieldmap[..., np.newaxis]*echo_times)
    ydata = coil_images[..., np.newaxis] * phase[..., np.newaxis, :]
    return ydata.astype(np.complex64)
