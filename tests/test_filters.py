import numpy as np
import pytest

from framefilters.filters import (
    BlurFilter,
    EdgeDetectionFilter,
    Filter,
    GrayscaleFilter,
    SepiaFilter,
)


class _RecordingWindow:
    def __init__(self):
        self.trackbars = []

    def create_trackbar(self, name, value, maximum, on_change):
        self.trackbars.append((name, value, maximum, on_change))


def _random_image(rows=40, cols=50, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, (rows, cols, 3), dtype=np.uint8)


def _uniform(value, rows=30, cols=40):
    return np.full((rows, cols, 3), value, dtype=np.uint8)


def test_filter_is_abstract():
    with pytest.raises(TypeError):
        Filter()


def test_default_create_trackbar_adds_nothing():
    window = _RecordingWindow()
    GrayscaleFilter().create_trackbar(window)
    SepiaFilter().create_trackbar(window)
    EdgeDetectionFilter().create_trackbar(window)
    assert window.trackbars == []


def test_grayscale_channels_equal_and_shape_kept():
    image = _random_image()
    out = GrayscaleFilter().apply(image)
    assert out.shape == image.shape
    assert out.dtype == np.uint8
    assert np.array_equal(out[..., 0], out[..., 1])
    assert np.array_equal(out[..., 1], out[..., 2])


def test_grayscale_keeps_gray_pixels():
    image = _uniform(137)
    assert np.array_equal(GrayscaleFilter().apply(image), image)


def test_grayscale_pure_red():
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    image[..., 2] = 255
    out = GrayscaleFilter().apply(image)
    assert out.shape == (4, 4, 3)
    assert out[0, 0].tolist() == [76, 76, 76]
    assert int(out.min()) == 76
    assert int(out.max()) == 76


def test_grayscale_rejects_single_channel():
    with pytest.raises(ValueError):
        GrayscaleFilter().apply(np.zeros((4, 4), dtype=np.uint8))


def test_blur_default_size():
    assert BlurFilter().blur_size == 11


def test_blur_uniform_image_unchanged():
    image = _uniform(90)
    assert np.array_equal(BlurFilter().apply(image), image)


def test_blur_size_one_is_identity():
    image = _random_image()
    blur = BlurFilter()
    blur.set_blur_size(1)
    assert np.array_equal(blur.apply(image), image)


@pytest.mark.parametrize("size", [0, -5])
def test_blur_size_has_minimum_of_one(size):
    blur = BlurFilter()
    blur.set_blur_size(size)
    assert blur.blur_size == 1


def test_blur_even_size_uses_next_odd():
    image = _random_image()
    even, odd = BlurFilter(), BlurFilter()
    even.set_blur_size(4)
    odd.set_blur_size(5)
    assert np.array_equal(even.apply(image), odd.apply(image))


def test_blur_spreads_impulse():
    image = np.zeros((41, 41, 3), dtype=np.uint8)
    image[20, 20] = 255
    out = BlurFilter().apply(image)
    assert out.shape == image.shape
    assert out[20, 20, 0] < 255
    assert out[20, 21, 0] > 0
    assert out[20, 19, 0] == out[20, 21, 0]
    assert abs(int(out[..., 0].sum()) - 255) < 20


def test_blur_trackbar_created_once():
    window = _RecordingWindow()
    blur = BlurFilter()
    blur.create_trackbar(window)
    blur.create_trackbar(window)
    assert len(window.trackbars) == 1
    name, value, maximum, _ = window.trackbars[0]
    assert (name, value, maximum) == ("Blur Size", 11, 31)


def test_blur_trackbar_callback_sets_size():
    window = _RecordingWindow()
    blur = BlurFilter()
    blur.create_trackbar(window)
    callback = window.trackbars[0][3]
    callback(7)
    assert blur.blur_size == 7
    callback(0)
    assert blur.blur_size == 1


def test_edges_of_uniform_image_empty():
    out = EdgeDetectionFilter().apply(_uniform(200))
    assert not out.any()


def test_edges_follow_step():
    image = np.zeros((10, 20, 3), dtype=np.uint8)
    image[:, 10:] = 255
    out = EdgeDetectionFilter().apply(image)
    assert out.shape == image.shape
    assert set(np.unique(out)) <= {0, 255}
    assert np.array_equal(out[..., 0], out[..., 2])
    edge_rows, edge_cols = np.nonzero(out[..., 0])
    assert set(edge_rows) == set(range(10))
    assert set(edge_cols) <= {9, 10}


def test_sepia_black_stays_black():
    out = SepiaFilter().apply(_uniform(0))
    assert not out.any()


def test_sepia_white():
    out = SepiaFilter().apply(_uniform(255, 2, 2))
    assert out[0, 0].tolist() == [239, 255, 255]


def test_sepia_channel_order_invariant():
    image = _random_image(seed=3)
    out = SepiaFilter().apply(image).astype(int)
    assert out.shape == image.shape
    assert np.all(out[..., 2] >= out[..., 1])
    assert np.all(out[..., 1] >= out[..., 0])


def test_sepia_rejects_wrong_channels():
    with pytest.raises(ValueError):
        SepiaFilter().apply(np.zeros((3, 3, 4), dtype=np.uint8))