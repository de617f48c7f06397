import numpy as np
import pytest
from PIL import Image

from convert2cbmpa.core import bmpa_encoder, image_source
from convert2cbmpa.core.errors import ImageDecodeError


def test_decode_png_reports_opacity_samples(tmp_path):
    path = tmp_path / "two.png"
    image = Image.new("RGBA", (2, 1))
    image.putpixel((0, 0), (255, 128, 0, 255))
    image.putpixel((1, 0), (1, 2, 3, 0))
    image.save(path)

    result = image_source.decode_image(path)

    assert result.ok
    source = result.unwrap()
    assert (source.width, source.height, source.max_value) == (2, 1, 255)
    assert source.query(0, 0) == (255, 128, 0, 0)
    assert source.query(1, 0) == (1, 2, 3, 255)
    assert source.samples().shape == (1, 2, 4)


def test_decode_rgb_image_is_fully_opaque(tmp_path):
    path = tmp_path / "rgb.bmp"
    Image.new("RGB", (3, 2), (10, 20, 30)).save(path)

    source = image_source.decode_image(path).unwrap()

    assert np.all(source.samples()[..., 3] == 0)
    assert source.query(2, 1) == (10, 20, 30, 0)


def test_missing_file_is_returned_as_error(tmp_path):
    result = image_source.decode_image(tmp_path / "missing.png")

    assert not result.ok
    assert result.source is None
    with pytest.raises(ImageDecodeError, match="File not found"):
        result.unwrap()


def test_unreadable_file_carries_library_message(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not an image")

    result = image_source.decode_image(path)

    assert isinstance(result.error, ImageDecodeError)
    assert "broken.png" in str(result.error)


def test_query_outside_image_raises():
    source = image_source.ArraySource(np.zeros((1, 1, 4), dtype=np.int32))
    with pytest.raises(IndexError):
        source.query(1, 0)


def test_array_source_rejects_bad_shape():
    with pytest.raises(ValueError):
        image_source.ArraySource(np.zeros((2, 2, 3)))


def test_sixteen_bit_grayscale_keeps_full_sample_range(tmp_path):
    path = tmp_path / "deep.png"
    Image.fromarray(np.array([[32768, 65535, 1000]], dtype=np.uint16)).save(path)

    source = image_source.decode_image(path).unwrap()
    pixels = bmpa_encoder.convert_pixels(source)

    assert source.max_value == 65535
    assert source.query(0, 0) == (32768, 32768, 32768, 0)
    assert pixels.tolist() == [[[128, 128, 128, 255], [255, 255, 255, 255], [4, 4, 4, 255]]]


def test_unwrap_without_source_or_error_raises(tmp_path):
    result = image_source.DecodeResult(path=tmp_path / "empty.png")
    with pytest.raises(ImageDecodeError, match="no image decoded"):
        result.unwrap()
