"""
Exceptions raised at the image I/O boundary
"""


class VPDetectionError(Exception):
    pass


class ImageLoadError(VPDetectionError):
    """
    The image decoder could not produce an image from a path
    """

    def __init__(self, path):
        super(ImageLoadError, self).__init__(
            'Failed to load: {}'.format(path))
        self.path = path


class ImageWriteError(VPDetectionError):
    """
    The image encoder could not persist an image to a path
    """

    def __init__(self, path, reason=None):
        msg = 'Failed to write: {}'.format(path)
        if reason is not None:
            msg += ' ({})'.format(reason)
        super(ImageWriteError, self).__init__(msg)
        self.path = path
