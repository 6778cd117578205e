"""
Straight edge detection with OpenCV: Gaussian blur, Canny and the
probabilistic Hough transform.
"""
import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class LineDetector(object):
    """
    Line segment detector

    Args:
        blur_kernel: Side length of the square Gaussian kernel (odd, default=5)
        blur_sigma: Standard deviation of the Gaussian blur (default=1.5)
        edge_low: Lower hysteresis threshold for Canny (default=50)
        edge_high: Upper hysteresis threshold for Canny (default=150)
        hough_rho: Distance resolution of the accumulator in pixels
                   (default=1)
        hough_theta: Angle resolution of the accumulator in radians
                     (default=pi / 180)
        hough_threshold: Accumulator votes needed to accept a line
                         (default=100)
        hough_min_len: Minimum segment length in pixels (default=100)
        hough_max_gap: Maximum gap in pixels between points on the same
                       segment (default=10)
    """

    def __init__(self,
                 blur_kernel=5,
                 blur_sigma=1.5,
                 edge_low=50,
                 edge_high=150,
                 hough_rho=1,
                 hough_theta=np.pi / 180,
                 hough_threshold=100,
                 hough_min_len=100,
                 hough_max_gap=10):
        self.blur_kernel = blur_kernel
        self.blur_sigma = blur_sigma
        self.set_edge_thresholds(edge_low, edge_high)
        self.hough_rho = hough_rho
        self.hough_theta = hough_theta
        self.hough_threshold = hough_threshold
        self.hough_min_len = hough_min_len
        self.hough_max_gap = hough_max_gap

    @property
    def blur_kernel(self):
        """
        Side length of the Gaussian blur kernel
        """
        return self._blur_kernel

    @blur_kernel.setter
    def blur_kernel(self, value):
        """
        Raises:
            ValueError: If the kernel size is not a positive odd integer
        """
        if int(value) != value or value <= 0 or value % 2 == 0:
            raise ValueError('Invalid blur kernel size: {}'.format(value))
        self._blur_kernel = int(value)

    @property
    def blur_sigma(self):
        return self._blur_sigma

    @blur_sigma.setter
    def blur_sigma(self, value):
        if value < 0:
            raise ValueError('Invalid blur sigma: {}'.format(value))
        self._blur_sigma = float(value)

    @property
    def edge_low(self):
        return self._edge_low

    @property
    def edge_high(self):
        return self._edge_high

    def set_edge_thresholds(self, low, high):
        """
        Sets both Canny thresholds at once

        Raises:
            ValueError: If a threshold is negative or low exceeds high
        """
        if low < 0 or high < 0 or low > high:
            raise ValueError(
                'Invalid Canny thresholds: low={}, high={}'.format(low, high))
        self._edge_low = low
        self._edge_high = high

    @property
    def hough_rho(self):
        return self._hough_rho

    @hough_rho.setter
    def hough_rho(self, value):
        if value <= 0:
            raise ValueError('Invalid distance resolution: {}'.format(value))
        self._hough_rho = value

    @property
    def hough_theta(self):
        return self._hough_theta

    @hough_theta.setter
    def hough_theta(self, value):
        if value <= 0:
            raise ValueError('Invalid angle resolution: {}'.format(value))
        self._hough_theta = value

    @property
    def hough_threshold(self):
        return self._hough_threshold

    @hough_threshold.setter
    def hough_threshold(self, value):
        if value <= 0:
            raise ValueError('Invalid accumulator threshold: {}'.format(value))
        self._hough_threshold = int(value)

    @property
    def hough_min_len(self):
        return self._hough_min_len

    @hough_min_len.setter
    def hough_min_len(self, value):
        if value < 0:
            raise ValueError('Invalid minimum line length: {}'.format(value))
        self._hough_min_len = value

    @property
    def hough_max_gap(self):
        return self._hough_max_gap

    @hough_max_gap.setter
    def hough_max_gap(self, value):
        if value < 0:
            raise ValueError('Invalid maximum line gap: {}'.format(value))
        self._hough_max_gap = value

    @property
    def params(self):
        """
        The detector options as a dictionary
        """
        return {
            'blur_kernel': self._blur_kernel,
            'blur_sigma': self._blur_sigma,
            'edge_low': self._edge_low,
            'edge_high': self._edge_high,
            'hough_rho': self._hough_rho,
            'hough_theta': self._hough_theta,
            'hough_threshold': self._hough_threshold,
            'hough_min_len': self._hough_min_len,
            'hough_max_gap': self._hough_max_gap,
        }

    def detect(self, img):
        """
        Detects straight line segments in an image

        Args:
            img: A grayscale or BGR image as read in with `cv2.imread`

        Returns:
            An N x 4 integer numpy array where each row is (x1, y1, x2, y2).
            N is 0 when nothing is found.
        """
        # Convert to grayscale if required
        if len(img.shape) == 3:
            gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
        else:
            gray = img

        k = self._blur_kernel
        blurred = cv2.GaussianBlur(gray, (k, k), self._blur_sigma)
        edges = cv2.Canny(blurred, self._edge_low, self._edge_high)
        lines = cv2.HoughLinesP(edges, self._hough_rho, self._hough_theta,
                                self._hough_threshold,
                                minLineLength=self._hough_min_len,
                                maxLineGap=self._hough_max_gap)

        if lines is None:
            logger.debug('No line segments found')
            return np.zeros((0, 4), dtype=int)

        lines = lines.reshape(-1, 4).astype(int)
        logger.debug('Detected %d line segments', lines.shape[0])
        return lines
