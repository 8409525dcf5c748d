"""
Exceptions raised when coil data has an unusable shape
"""


class CoilCombineError(ValueError):
    pass


class DimensionError(CoilCombineError):
    '''Input has no discoverable coil/echo axes, or one of them is empty'''
    pass


class ShapeMismatchError(CoilCombineError):
    '''Sensitivity map shape does not match ``(spatial..., coil)`` of the image data

    :param smap_shape: observed shape of the sensitivity map
    :param expected_shape: shape derived from the image data
    '''

    def __init__(self, smap_shape, expected_shape):
        self.smap_shape = tuple(smap_shape)
        self.expected_shape = tuple(expected_shape)
        super(ShapeMismatchError, self).__init__(
            "bad smap size {} != {}".format(self.smap_shape, self.expected_shape))
