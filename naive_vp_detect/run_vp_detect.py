import argparse
import logging
import os
import sys

import numpy as np

from naive_vp_detect.batch import process_directory, process_image
from naive_vp_detect.errors import ImageLoadError, ImageWriteError
from naive_vp_detect.image_io import ensure_dir
from naive_vp_detect.line_detector import LineDetector

DEFAULT_INPUT = 'Estimate_vanishing_points_data'
DEFAULT_OUTPUT = 'output_results'


def build_parser():
    parser = argparse.ArgumentParser(
        description='Naive vanishing point estimation by averaging line '
        'intersections')
    parser.add_argument('-i', '--input', default=DEFAULT_INPUT,
        help='Input image or directory of images')
    parser.add_argument('-o', '--output', default=DEFAULT_OUTPUT,
        help='Output directory, or output image path for a single input '
        'image')
    parser.add_argument('--min-angle', default=20.0, type=float,
        help='Drop lines with |angle| at or below this (degrees)')
    parser.add_argument('--max-angle', default=160.0, type=float,
        help='Drop lines with |angle| at or above this (degrees)')
    parser.add_argument('--estimator', default='mean',
        choices=['mean', 'median'],
        help='How intersections are reduced to a single point')
    parser.add_argument('-j', '--jobs', default=1, type=int,
        help='Number of images processed concurrently')
    parser.add_argument('-v', '--verbose', action='count', default=0,
        help='Increase logging verbosity')

    det = parser.add_argument_group('line detector')
    det.add_argument('--blur-kernel', default=5, type=int,
        help='Gaussian blur kernel size (odd)')
    det.add_argument('--blur-sigma', default=1.5, type=float,
        help='Gaussian blur sigma')
    det.add_argument('--edge-low', default=50, type=float,
        help='Canny lower threshold')
    det.add_argument('--edge-high', default=150, type=float,
        help='Canny upper threshold')
    det.add_argument('--hough-rho', default=1, type=float,
        help='Hough distance resolution (pixels)')
    det.add_argument('--hough-theta', default=1, type=float,
        help='Hough angle resolution (degrees)')
    det.add_argument('--hough-threshold', default=100, type=int,
        help='Hough accumulator threshold')
    det.add_argument('--hough-min-len', default=100, type=float,
        help='Minimum line length (pixels)')
    det.add_argument('--hough-max-gap', default=10, type=float,
        help='Maximum gap between line points (pixels)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level,
                        format='%(asctime)s %(levelname)s %(name)s: '
                        '%(message)s')
    logger = logging.getLogger('naive_vp_detect')

    try:
        detector = LineDetector(blur_kernel=args.blur_kernel,
                                blur_sigma=args.blur_sigma,
                                edge_low=args.edge_low,
                                edge_high=args.edge_high,
                                hough_rho=args.hough_rho,
                                hough_theta=np.deg2rad(args.hough_theta),
                                hough_threshold=args.hough_threshold,
                                hough_min_len=args.hough_min_len,
                                hough_max_gap=args.hough_max_gap)
    except ValueError as e:
        logger.error('%s', e)
        return 2

    vpd_kwargs = dict(min_angle=args.min_angle,
                      max_angle=args.max_angle,
                      estimator=args.estimator,
                      detector=detector)

    try:
        if os.path.isdir(args.input):
            results = process_directory(args.input, args.output,
                                        jobs=args.jobs, **vpd_kwargs)
            print('Processed {} image(s) into {}'.format(len(results),
                                                         args.output))
            return 0

        output_path = args.output
        if os.path.isdir(output_path) or not os.path.splitext(output_path)[1]:
            ensure_dir(output_path)
            output_path = os.path.join(output_path,
                                       os.path.basename(args.input))
        vp = process_image(args.input, output_path, **vpd_kwargs)
    except ImageLoadError as e:
        logger.error('%s', e)
        return 1
    except ImageWriteError as e:
        logger.error('%s', e)
        return 1
    except ValueError as e:
        logger.error('%s', e)
        return 2

    print('Input path: {}'.format(args.input))
    if vp is None:
        print('No vanishing point: no line intersections in range')
    else:
        print('Vanishing point: ({:.2f}, {:.2f})'.format(vp[0], vp[1]))
    print('Debug image written to: {}'.format(output_path))
    return 0


if __name__ == '__main__':
    sys.exit(main())
