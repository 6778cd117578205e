"""
Naive single vanishing point estimation.

Straight edges are detected, the near-horizontal ones are discarded, every
remaining pair is intersected as infinite lines and the intersections that
land in a generous box around the image are averaged.
"""
import logging

import cv2

from naive_vp_detect.geometry import (Estimator, as_lines,
                                      collect_intersections, estimate_vp,
                                      filter_lines)
from naive_vp_detect.image_io import read_image, write_image
from naive_vp_detect.line_detector import LineDetector
from naive_vp_detect.visualization import draw_vp_overlay

logger = logging.getLogger(__name__)


class VPDetection(object):
    """
    VP Detection Object

    Holds the state for one image at a time: the image, the raw and filtered
    line segments, the retained intersections and the estimate. Everything
    is replaced on each call to `find_vp`.

    Args:
        min_angle: Segments with |angle| <= min_angle degrees are dropped
                   (default=20)
        max_angle: Segments with |angle| >= max_angle degrees are dropped
                   (default=160)
        estimator: How the intersections are reduced to one point
                   (default=Estimator.MEAN)
        detector: Object with a `detect(img)` method returning an N x 4
                  array of segments (default=LineDetector())
    """

    def __init__(self,
                 min_angle=20.0,
                 max_angle=160.0,
                 estimator=Estimator.MEAN,
                 detector=None):
        self.set_angle_range(min_angle, max_angle)
        self.estimator = estimator
        self.detector = detector if detector is not None else LineDetector()
        self.__reset()

    def __reset(self):
        self.__img = None
        self.__lines = None  # Raw detections
        self.__filtered = None  # Detections that passed the angle test
        self.__intersections = None
        self._vp = None

    @property
    def min_angle(self):
        return self._min_angle

    @property
    def max_angle(self):
        return self._max_angle

    def set_angle_range(self, min_angle, max_angle):
        """
        Sets the open interval of |angle| values a segment must fall in

        Raises:
            ValueError: Unless 0 <= min_angle < max_angle <= 180
        """
        if not 0 <= min_angle < max_angle <= 180:
            raise ValueError('Invalid angle range: ({}, {})'.format(
                min_angle, max_angle))
        self._min_angle = min_angle
        self._max_angle = max_angle

    @property
    def estimator(self):
        return self._estimator

    @estimator.setter
    def estimator(self, value):
        """
        Args:
            value: An `Estimator` member or its name ('mean', 'median')

        Raises:
            ValueError: If the estimator is unknown
        """
        if isinstance(value, str):
            try:
                value = Estimator[value.upper()]
            except KeyError:
                raise ValueError('Invalid estimator: {}'.format(value))
        if not isinstance(value, Estimator):
            raise ValueError('Invalid estimator: {}'.format(value))
        self._estimator = value

    @property
    def vp(self):
        """
        The vanishing point estimate of the last image

        Returns:
            A numpy array (x, y), or None if no intersection was retained
        """
        return self._vp

    @property
    def lines(self):
        """
        Raw line segments of the last image as an N x 4 array
        """
        return self.__lines

    @property
    def filtered_lines(self):
        """
        Line segments of the last image that passed the angle test
        """
        return self.__filtered

    @property
    def intersections(self):
        """
        Retained pairwise intersections of the last image as a K x 2 array
        """
        return self.__intersections

    def find_vp(self, img):
        """
        Find the vanishing point given the input image

        Args:
            img: Either the path to the image or the image read in with
         `cv2.imread`

        Returns:
            A numpy array (x, y) in image coordinates, or None when no pair
            of filtered lines meets inside [0, 2 * width) x [0, 2 * height)

        Raises:
            ImageLoadError: If img is a path that cannot be decoded
        """
        self.__reset()
        if isinstance(img, str):
            img = read_image(img)
        self.__img = img

        rows, cols = img.shape[:2]

        self.__lines = as_lines(self.detector.detect(img))
        self.__filtered = filter_lines(self.__lines, self._min_angle,
                                       self._max_angle)
        logger.debug('%d of %d segments passed the angle test',
                     self.__filtered.shape[0], self.__lines.shape[0])

        self.__intersections = collect_intersections(self.__filtered, cols,
                                                     rows)
        self._vp = estimate_vp(self.__intersections, self._estimator)
        return self._vp

    def create_debug_VP_image(self, show_image=False, save_image=None):
        """
        Once the VP detection algorithm runs, draw the filtered lines and the
        estimated vanishing point over a copy of the input image

        Args:
            show_image: Show the image in an OpenCV imshow window
                        (default=false)
            save_image: Provide a path to save the image to file
                       (default=None - no image is saved)

        Returns:
            The debug image

        Raises:
            ValueError: If no image has been processed yet or the path to the
            image is not a string or None
            ImageWriteError: If the image cannot be written to save_image
        """
        if self.__img is None:
            raise ValueError('find_vp must be called before creating the '
                             'debug image')

        if save_image is not None and not isinstance(save_image, str):
            raise ValueError('The save_image path should be a string')

        img = draw_vp_overlay(self.__img, self.__filtered, self._vp)

        # Show image if necessary
        if show_image:
            cv2.imshow('VP Debug Image', img)
            cv2.waitKey(1)

        # Save image if necessary
        if save_image is not None and save_image != '':
            write_image(save_image, img)

        return img
