import pytest
from PIL import Image

from convert2cbmpa.core import ConversionSettings
from convert2cbmpa.core.errors import ImageDecodeError
from convert2cbmpa.core.pipeline import convert


def test_convert_returns_outcome(tmp_path):
    source = tmp_path / "sheet.png"
    Image.new("RGBA", (4, 2), (255, 0, 0, 255)).save(source)
    info = tmp_path / "info.json"
    info.write_text('{"animations": [{"baseFrame": 0, "startFrame": 0, "endFrame": 3, "rate": 8}]}', encoding="utf-8")
    out = tmp_path / "sheet.bmpa"

    outcome = convert(ConversionSettings(input_path=source, output_path=out, metadata_path=info))

    assert (outcome.width, outcome.height, outcome.animation_count) == (4, 2, 1)
    assert outcome.bytes_written == 1 + 16 + 4 * 2 * 4 + 4 + 8
    assert out.read_bytes()[17:21] == b"\xff\x00\x00\xff"


def test_decode_failure_writes_nothing(tmp_path):
    info = tmp_path / "info.json"
    info.write_text('{"comment": "kept"}', encoding="utf-8")
    out = tmp_path / "sheet.bmpa"

    with pytest.raises(ImageDecodeError):
        convert(ConversionSettings(input_path=tmp_path / "absent.png", output_path=out, metadata_path=info))
    assert not out.exists()
