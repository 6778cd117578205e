from naive_vp_detect.__version__ import __version__
from naive_vp_detect.geometry import (Estimator, collect_intersections,
                                      compute_intersection, estimate_vp,
                                      filter_lines)
from naive_vp_detect.line_detector import LineDetector
from naive_vp_detect.vp_detection import VPDetection
