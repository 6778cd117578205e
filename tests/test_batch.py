import os

import cv2
import numpy as np
import pytest

from naive_vp_detect.batch import process_directory, process_image
from naive_vp_detect.errors import ImageLoadError, ImageWriteError
from naive_vp_detect.image_io import read_image, write_image


@pytest.fixture
def image_dir(tmp_path):
    in_dir = tmp_path / 'in'
    in_dir.mkdir()

    blank = np.full((120, 160, 3), 90, dtype=np.uint8)
    cv2.imwrite(str(in_dir / 'blank.png'), blank)

    cross = np.zeros((400, 400, 3), dtype=np.uint8)
    cv2.line(cross, (50, 350), (350, 50), (255, 255, 255), 3)
    cv2.line(cross, (50, 50), (350, 350), (255, 255, 255), 3)
    cv2.imwrite(str(in_dir / 'cross.png'), cross)

    (in_dir / 'notes.txt').write_text('not an image')
    (in_dir / 'nested').mkdir()
    return in_dir


def test_process_directory(image_dir, tmp_path):
    out_dir = tmp_path / 'out' / 'results'
    results = process_directory(str(image_dir), str(out_dir))

    assert sorted(results) == ['blank.png', 'cross.png']
    assert results['blank.png'] is None
    assert results['cross.png'] is not None
    assert sorted(os.listdir(str(out_dir))) == ['blank.png', 'cross.png']

    # Nothing to draw on the blank image
    np.testing.assert_array_equal(read_image(str(out_dir / 'blank.png')),
                                  read_image(str(image_dir / 'blank.png')))


def test_load_failures_are_logged_and_skipped(image_dir, tmp_path, caplog):
    caplog.set_level('WARNING')
    results = process_directory(str(image_dir), str(tmp_path / 'out'))
    assert 'notes.txt' not in results
    assert any('notes.txt' in r.getMessage() for r in caplog.records)


def test_concurrent_matches_sequential(image_dir, tmp_path):
    seq = process_directory(str(image_dir), str(tmp_path / 'seq'))
    par = process_directory(str(image_dir), str(tmp_path / 'par'), jobs=3)
    assert sorted(seq) == sorted(par)
    assert par['blank.png'] is None
    np.testing.assert_allclose(par['cross.png'], seq['cross.png'])


def test_invalid_jobs(image_dir, tmp_path):
    with pytest.raises(ValueError):
        process_directory(str(image_dir), str(tmp_path / 'out'), jobs=0)


def test_write_failure_propagates(image_dir, tmp_path):
    with pytest.raises(ImageWriteError):
        process_image(str(image_dir / 'blank.png'),
                      str(tmp_path / 'missing' / 'blank.png'))


def test_process_image_load_failure(image_dir, tmp_path):
    with pytest.raises(ImageLoadError):
        process_image(str(image_dir / 'notes.txt'),
                      str(tmp_path / 'notes.txt'))


def test_write_image_unknown_extension(tmp_path):
    img = np.zeros((10, 10, 3), dtype=np.uint8)
    with pytest.raises(ImageWriteError):
        write_image(str(tmp_path / 'out.notanimage'), img)
