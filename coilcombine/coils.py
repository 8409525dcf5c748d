# -*- coding: utf-8 -*-
"""
Complex coil combination of multi-coil, multi-echo image data
"""
import numpy as np

from coilcombine.errors import DimensionError, ShapeMismatchError


def div0(a, b):
    '''Elementwise division that returns 0 where the divisor is exactly 0

    :param a: Numerator (array or scalar)
    :param b: Divisor, broadcastable against ``a``

    :returns q: ``a / b`` where ``b != 0``, 0 elsewhere
    '''

    a = np.asarray(a)
    b = np.asarray(b)
    q = np.zeros(np.broadcast(a, b).shape, dtype=np.result_type(a, b, np.float32))
    np.divide(a, b, out=q, where=(b != 0))
    return q


def weighted_combine(ydata, smap, verbose=False):
    """ Combine coil images using known complex coil sensitivity maps.

    For estimating a B0 field map from complete multi-coil image data it
    suffices to first do complex coil combination, while tracking the
    sum-of-squares ``sos`` for proper weighting. Often ``sos`` is all 1's
    and 0's.

    Parameters
    ----------
    ydata : (spatial..., coil, echo) array
        Complex coil images, ``nc >= 1`` coils and ``ne >= 1`` echoes.
    smap : (spatial..., coil) array
        Complex coil sensitivity maps.
    verbose : bool
        If true, a short summary of the combination is printed.

    Returns
    -------
    zdata : (spatial..., echo) array
        Coil combined images, ``sum_c conj(smap[c]) * ydata[c] / sos``.
    sos : (spatial...) array
        Sum-of-squares of the sensitivities, ``sum_c |smap[c]|^2``.

    Raises
    ------
    DimensionError
        If ``ydata`` has no coil and echo axes or either is empty.
    ShapeMismatchError
        If ``smap.shape`` is not ``ydata.shape[:-1]``.
    """

    ydata = _as_complex(ydata)
    smap = _as_complex(smap)
    dims, nc, ne = _image_dimensions(ydata)

    if smap.shape != dims + (nc,):
        raise ShapeMismatchError(smap.shape, dims + (nc,))

    sos = np.zeros(dims, dtype=smap.real.dtype)
    for cha in range(nc):
        sos += np.abs(smap[..., cha]) ** 2

    smap_norm = div0(smap, sos[..., np.newaxis])
    zdata = _combine_coils(smap_norm, ydata)

    if verbose:
        _print_summary("Sensitivity weighted", nc, ne, sos)

    return zdata, sos


def self_weighted_combine(ydata, normalize=True, verbose=False):
    """ Combine coil images without sensitivity maps.

    The coil images of the first echo serve as surrogate sensitivities:
    each coil is weighted by its first-echo image divided by the
    root-sum-of-squares over coils, and the same weights combine every echo.

    Parameters
    ----------
    ydata : (spatial..., coil, echo) array
        Complex coil images, ``nc >= 1`` coils and ``ne >= 1`` echoes.
    normalize : bool
        Scale ``sos`` by its maximum so that it lies in ``[0, 1]``
        (default ``True``). This keeps a regularization parameter of the
        field-map estimator independent of image intensity.
    verbose : bool
        If true, a short summary of the combination is printed.

    Returns
    -------
    zdata : (spatial..., echo) array
        Coil combined images.
    sos : (spatial...) array
        Root-sum-of-squares of the first-echo coil images.
    """

    ydata = _as_complex(ydata)
    dims, nc, ne = _image_dimensions(ydata)

    y1 = ydata[..., 0]
    sos = np.zeros(dims, dtype=ydata.real.dtype)
    for cha in range(nc):
        sos += np.abs(y1[..., cha]) ** 2
    np.sqrt(sos, out=sos)

    weights = div0(y1, sos[..., np.newaxis])
    zdata = _combine_coils(weights, ydata)

    if normalize and sos.size:
        sos = div0(sos, sos.max())

    if verbose:
        _print_summary("Self weighted", nc, ne, sos)

    return zdata, sos


def coil_combine(ydata, smap=None, **kwargs):
    '''Complex coil combination, with or without sensitivity maps

    :param ydata: Complex coil images, ``[spatial..., coil, echo]``
    :param smap: Complex coil sensitivity maps, ``[spatial..., coil]``; if
                 ``None`` the first echo is used to weight the coils
    :param kwargs: Passed on to ``weighted_combine`` or ``self_weighted_combine``

    :returns zdata: Coil combined images, ``[spatial..., echo]``
    :returns sos: Sum-of-squares weighting map, ``[spatial...]``
    '''

    if smap is None:
        return self_weighted_combine(ydata, **kwargs)
    return weighted_combine(ydata, smap, **kwargs)


def _as_complex(x):
    x = np.asarray(x)
    return x.astype(np.result_type(x.dtype, np.complex64), copy=False)


def _image_dimensions(ydata):
    if ydata.ndim < 2:
        raise DimensionError("Expected image data with trailing (coil, echo) "
                             "axes, got shape {}".format(ydata.shape))
    dims = ydata.shape[:-2]
    nc, ne = ydata.shape[-2:]
    if nc < 1 or ne < 1:
        raise DimensionError("Need at least one coil and one echo, got "
                             "{} coils and {} echoes".format(nc, ne))
    return dims, nc, ne


def _combine_coils(weights, ydata):
    # accumulate in ascending coil order so results are reproducible
    nc = ydata.shape[-2]
    zdata = np.zeros(ydata.shape[:-2] + ydata.shape[-1:],
                     dtype=np.result_type(weights, ydata))
    for cha in range(nc):
        zdata += np.conj(weights[..., cha, np.newaxis]) * ydata[..., cha, :]
    return zdata


def _print_summary(name, nc, ne, sos):
    print("{} coil combination: {} coils, {} echoes".format(name, nc, ne))
    print("sos max = {}, zero-weight locations: {}".format(
        sos.max() if sos.size else 0, np.count_nonzero(sos == 0)))
