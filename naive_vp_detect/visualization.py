"""
Overlay of the filtered lines and the estimated vanishing point
"""
import cv2
import numpy as np

LINE_COLOUR = (0, 255, 0)  # BGR - green
LINE_THICKNESS = 2
VP_COLOUR = (0, 0, 255)  # BGR - red
VP_RADIUS = 10


def draw_vp_overlay(img, lines, vp=None):
    """
    Draws line segments and, if defined, the vanishing point onto a copy of
    an image

    Args:
        img: The original image. It is left untouched.
        lines: N x 4 array of segments to draw
        vp: The estimated vanishing point (x, y) or None

    Returns:
        The annotated copy
    """
    lines = np.asarray(lines).reshape(-1, 4)
    out = img.copy()
    if lines.shape[0] == 0 and vp is None:
        return out

    if len(out.shape) == 2:  # If grayscale, artificially make into BGR
        out = np.dstack([out, out, out])

    for (x1, y1, x2, y2) in lines:
        cv2.line(out, (int(x1), int(y1)), (int(x2), int(y2)), LINE_COLOUR,
                 LINE_THICKNESS, cv2.LINE_AA)

    if vp is not None:
        centre = (int(round(vp[0])), int(round(vp[1])))
        cv2.circle(out, centre, VP_RADIUS, VP_COLOUR, -1)

    return out
