import numpy as np
import pytest

from histlib import ContrastNormalizer, NormalizationBounds


@pytest.fixture
def normalizer():
    return ContrastNormalizer()


# Gray layout used by the clipping tests: 100 pixels, 3 outliers at each end below/above the bulk
CLIP_LEVELS = [10, 20, 128, 230, 250]
CLIP_COUNTS = [3, 3, 88, 3, 3]


# --------------------------------------------------------------------------------------------
# Bounds and lookup table
# --------------------------------------------------------------------------------------------
def test_bounds_properties():
    assert NormalizationBounds(10, 10).is_degenerate
    assert NormalizationBounds(20, 10).is_degenerate
    assert not NormalizationBounds(10, 11).is_degenerate
    assert NormalizationBounds(0, 255).is_identity
    assert not NormalizationBounds(0, 254).is_identity


def test_remap_lut():
    lut = ContrastNormalizer.remap_lut(NormalizationBounds(50, 200))

    assert lut.shape == (256,)
    assert lut.dtype == np.uint8
    assert lut[0] == 0
    assert lut[50] == 0
    assert lut[125] == 128  # 127.5 rounds up
    assert lut[200] == 255
    assert lut[255] == 255
    assert np.all(np.diff(lut.astype(int)) >= 0)


def test_remap_lut_degenerate_is_identity():
    lut = ContrastNormalizer.remap_lut(NormalizationBounds(7, 7))
    assert np.array_equal(lut, np.arange(256, dtype=np.uint8))


def test_value_bounds(normalizer, gray_row):
    assert normalizer.value_bounds(gray_row([50, 125, 200])) == (50, 200)


def test_value_bounds_uses_brightest_channel(normalizer):
    img = np.array([[[10, 40, 30], [0, 0, 90]]], dtype=np.uint8)
    assert normalizer.value_bounds(img) == NormalizationBounds(40, 90)


def test_value_histogram(normalizer, gray_row):
    bins = normalizer.value_histogram(gray_row(CLIP_LEVELS, CLIP_COUNTS))

    assert bins.shape == (256,)
    assert bins.sum() == 100
    assert bins[128] == 88
    assert bins[250] == 3


# --------------------------------------------------------------------------------------------
# normalize
# --------------------------------------------------------------------------------------------
def test_normalize_stretches_to_full_range(normalizer, gray_row):
    result = normalizer.normalize(gray_row([50, 125, 200]))

    assert result.shape == (1, 3, 3)
    assert result.dtype == np.uint8
    assert result[0, :, 0].tolist() == [0, 128, 255]
    # Gray stays gray
    assert np.all(result[..., 0] == result[..., 1])
    assert np.all(result[..., 1] == result[..., 2])


def test_normalize_keeps_hue_and_saturation(normalizer):
    # Pure red at three brightness levels: hue 0, saturation 255
    img = np.array([[[0, 0, 60], [0, 0, 120], [0, 0, 180]]], dtype=np.uint8)

    result = normalizer.normalize(img)

    assert not np.any(result[..., :2])
    assert result[0, :, 2].tolist() == [0, 128, 255]


def test_normalize_constant_value_is_unchanged(normalizer, constant_bgr):
    img = constant_bgr(40, 90, 70)

    result = normalizer.normalize(img)

    assert result is not img
    assert np.array_equal(result, img)


def test_normalize_full_range_is_unchanged(normalizer):
    rng = np.random.default_rng(7)
    img = rng.integers(0, 256, size=(16, 16, 3), dtype=np.uint8)
    img[0, 0] = (0, 0, 0)
    img[0, 1] = (255, 255, 255)

    assert np.array_equal(normalizer.normalize(img), img)


def test_normalize_is_idempotent(normalizer, gray_row):
    once = normalizer.normalize(gray_row([30, 60, 90, 120, 150]))
    twice = normalizer.normalize(once)

    assert np.array_equal(once, twice)


def test_normalize_does_not_modify_input(normalizer, gray_row):
    img = gray_row([50, 125, 200])
    before = img.copy()

    normalizer.normalize(img)

    assert np.array_equal(img, before)


@pytest.mark.parametrize(
    "img, error",
    [
        (np.zeros((4, 4), dtype=np.uint8), ValueError),
        (np.zeros((4, 4, 4), dtype=np.uint8), ValueError),
        (np.zeros((0, 4, 3), dtype=np.uint8), ValueError),
        (np.zeros((4, 4, 3), dtype=np.float32), TypeError),
        ([[0, 0, 0]], TypeError),
    ],
)
def test_normalize_rejects_non_bgr_input(normalizer, img, error):
    with pytest.raises(error):
        normalizer.normalize(img)


# --------------------------------------------------------------------------------------------
# normalize_clipped
# --------------------------------------------------------------------------------------------
def test_clipped_bounds_cut_outliers(normalizer, gray_row):
    img = gray_row(CLIP_LEVELS, CLIP_COUNTS)

    # 10% of 100 pixels -> 5 per end; the running count first exceeds 5 at 20 and at 230
    assert normalizer.clipped_value_bounds(img, 10) == (20, 230)


def test_clipped_lower_bound_stays_zero_when_bucket_zero_is_large(normalizer, gray_row):
    img = gray_row([0, 20, 128, 230, 250], [6, 3, 85, 3, 3])
    assert normalizer.clipped_value_bounds(img, 10) == (0, 230)


def test_clipped_upper_bound_counts_top_bucket_twice(normalizer, gray_row):
    # 3 pixels at 255 seed the sum and are added again: 6 > 5 stops the scan at 255
    img = gray_row([10, 20, 128, 200, 255], [3, 3, 88, 3, 3])
    assert normalizer.clipped_value_bounds(img, 10) == (20, 255)


def test_normalize_clipped(normalizer, gray_row):
    result = normalizer.normalize_clipped(gray_row(CLIP_LEVELS, CLIP_COUNTS), 10)

    levels = result[0, :, 0]
    assert set(levels[:6].tolist()) == {0}
    # (128 - 20) * 255 / 210 = 131.14
    assert set(levels[6:94].tolist()) == {131}
    assert set(levels[94:].tolist()) == {255}


def test_normalize_clipped_zero_matches_normalize(normalizer, gray_row):
    img = gray_row([50, 80, 125, 170, 200])

    assert normalizer.clipped_value_bounds(img, 0) == normalizer.value_bounds(img)
    assert np.array_equal(normalizer.normalize_clipped(img, 0), normalizer.normalize(img))


def test_normalize_clipped_tiny_clip_matches_normalize(normalizer, gray_row):
    # 0.1% of 5 pixels rounds to nothing to clip
    img = gray_row([50, 80, 125, 170, 200])
    assert np.array_equal(normalizer.normalize_clipped(img, 0.1), normalizer.normalize(img))


def test_normalize_clipped_degenerate_window_is_unchanged(normalizer, gray_row):
    # Clipping everything collapses both bounds onto the bulk
    img = gray_row(CLIP_LEVELS, CLIP_COUNTS)

    bounds = normalizer.clipped_value_bounds(img, 100)
    assert bounds.is_degenerate
    assert np.array_equal(normalizer.normalize_clipped(img, 100), img)


def test_normalize_clipped_clamps_percent(normalizer, gray_row):
    img = gray_row(CLIP_LEVELS, CLIP_COUNTS)

    assert np.array_equal(normalizer.normalize_clipped(img, -5), normalizer.normalize(img))
    assert np.array_equal(normalizer.normalize_clipped(img, 250), normalizer.normalize_clipped(img, 100))


@pytest.mark.parametrize("clip, error", [("5", TypeError), (None, TypeError), (True, TypeError), (float("nan"), ValueError)])
def test_normalize_clipped_rejects_bad_percent(normalizer, gray_row, clip, error):
    with pytest.raises(error):
        normalizer.normalize_clipped(gray_row([1, 2, 3]), clip)
