"""
Runs the vanishing point estimator over every file in a directory and
writes one annotated image per input into an output directory.
"""
import logging
import os

from concurrent.futures import ThreadPoolExecutor

from naive_vp_detect.errors import ImageLoadError
from naive_vp_detect.image_io import ensure_dir
from naive_vp_detect.vp_detection import VPDetection

logger = logging.getLogger(__name__)


def process_image(input_path, output_path, **vpd_kwargs):
    """
    Estimates the vanishing point of one image and writes the debug image

    Args:
        input_path: Path to the image
        output_path: Where the annotated image is written
        vpd_kwargs: Forwarded to `VPDetection`

    Returns:
        The estimate (x, y) or None if it is undefined for this image

    Raises:
        ImageLoadError: If the image cannot be decoded
        ImageWriteError: If the annotated image cannot be written
    """
    vpd = VPDetection(**vpd_kwargs)
    vp = vpd.find_vp(input_path)
    vpd.create_debug_VP_image(save_image=output_path)
    logger.info('Processed: %s -> %s', input_path, output_path)
    return vp


def _try_process(input_path, output_path, vpd_kwargs):
    try:
        return True, process_image(input_path, output_path, **vpd_kwargs)
    except ImageLoadError as e:
        logger.warning('%s', e)
        return False, None


def process_directory(input_dir, output_dir, jobs=1, **vpd_kwargs):
    """
    Processes every regular file in `input_dir`

    Files that cannot be decoded are logged and skipped. A failure to write
    an output image is raised to the caller.

    Args:
        input_dir: Directory with the input images
        output_dir: Directory for the annotated images (created if absent).
                    Each output keeps the input's file name.
        jobs: Number of images processed concurrently (default=1)
        vpd_kwargs: Forwarded to `VPDetection` for every image. A
                    `detector` passed here is shared between images and
                    must not keep per-image state.

    Returns:
        A dictionary mapping each processed file name to its estimate (None
        where undefined). Skipped files are absent.

    Raises:
        ValueError: If jobs is less than 1
        ImageWriteError: If an annotated image cannot be written
    """
    if jobs < 1:
        raise ValueError('Invalid number of jobs: {}'.format(jobs))

    ensure_dir(output_dir)
    names = sorted(name for name in os.listdir(input_dir)
                   if os.path.isfile(os.path.join(input_dir, name)))
    tasks = [(name, os.path.join(input_dir, name),
              os.path.join(output_dir, name)) for name in names]

    if jobs == 1:
        outcomes = [_try_process(inp, out, vpd_kwargs)
                    for (_, inp, out) in tasks]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            futures = [pool.submit(_try_process, inp, out, vpd_kwargs)
                       for (_, inp, out) in tasks]
            outcomes = [f.result() for f in futures]

    results = {}
    for (name, _, _), (ok, vp) in zip(tasks, outcomes):
        if ok:
            results[name] = vp
    logger.info('%d of %d images processed', len(results), len(tasks))
    return results
