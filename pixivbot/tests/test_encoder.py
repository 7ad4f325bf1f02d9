"""Tests for the budget-constrained JPEG encoder."""

import io

import pytest
from PIL import Image

from pixivbot.exceptions import EncodeExhausted
from pixivbot.services.image_pipeline.encoder import BudgetEncoder, encode_within_budget


class FakeRaster:
    """Stands in for a PIL image: the encoded size depends only on quality."""

    def __init__(self, sizes, default=0, chunk=64):
        self.sizes = sizes
        self.default = default
        self.chunk = chunk
        self.qualities = []
        self.destinations = []

    def save(self, fp, format=None, quality=None, **params):
        assert format == "JPEG"
        self.qualities.append(quality)
        self.destinations.append(fp)
        payload = bytes([quality]) * self.sizes.get(quality, self.default)
        for start in range(0, len(payload), self.chunk):
            fp.write(payload[start : start + self.chunk])


class TestBudgetEncoder:
    def test_first_fit_at_full_quality(self):
        raster = FakeRaster({}, default=100)

        result = BudgetEncoder(max_size=1000).encode(raster)

        assert result.quality == 100
        assert result.attempts == [100]
        assert result.data == bytes([100]) * 100

    def test_steps_down_until_fit(self):
        raster = FakeRaster({100: 5000, 90: 2000, 80: 900, 70: 500})

        result = BudgetEncoder(max_size=1000).encode(raster)

        assert result.attempts == [100, 90, 80]
        assert raster.qualities == [100, 90, 80]
        assert result.quality == 80
        assert result.data == bytes([80]) * 900

    def test_exact_budget_fits(self):
        raster = FakeRaster({100: 1000})
        result = BudgetEncoder(max_size=1000).encode(raster)
        assert len(result.data) == 1000

    def test_reuses_one_buffer(self):
        raster = FakeRaster({100: 5000, 90: 5000, 80: 10})

        BudgetEncoder(max_size=1000).encode(raster)

        assert len({id(fp) for fp in raster.destinations}) == 1

    def test_exhausted_after_quality_ten(self):
        raster = FakeRaster({}, default=2000)

        with pytest.raises(EncodeExhausted) as exc_info:
            BudgetEncoder(max_size=1000).encode(raster)

        expected = [100, 90, 80, 70, 60, 50, 40, 30, 20, 10]
        assert raster.qualities == expected
        assert exc_info.value.attempts == expected
        assert exc_info.value.max_size == 1000
        assert "cannot produce a compliant asset" in str(exc_info.value)

    def test_attempts_strictly_decreasing(self):
        raster = FakeRaster({30: 10}, default=2000)

        result = BudgetEncoder(max_size=1000).encode(raster)

        assert result.attempts == [100, 90, 80, 70, 60, 50, 40, 30]
        assert all(a - b == 10 for a, b in zip(result.attempts, result.attempts[1:]))

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            BudgetEncoder(max_size=1000, quality_step=0)

    def test_real_image_steps_below_full_quality(self, noise_image, encode_image):
        full_quality_size = len(encode_image(noise_image, "JPEG", quality=100))
        budget = full_quality_size - 1

        result = BudgetEncoder(max_size=budget).encode(noise_image)

        assert result.quality < 100
        assert result.attempts[0] == 100
        assert len(result.data) <= budget
        assert Image.open(io.BytesIO(result.data)).format == "JPEG"

    def test_real_image_exhausted(self, noise_image):
        # JPEG headers and tables alone are larger than this
        with pytest.raises(EncodeExhausted):
            encode_within_budget(noise_image, max_size=100)

    def test_large_downscaled_raster_single_attempt(self):
        img = Image.new("RGB", (2560, 1536), (40, 90, 160))

        result = BudgetEncoder(max_size=10 * 1024 * 1024).encode(img)

        assert result.attempts == [100]
        assert Image.open(io.BytesIO(result.data)).size == (2560, 1536)
