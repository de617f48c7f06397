"""Convert raster images into the Collie bmpa sprite format.

The package can be driven through the ``convert2cbmpa`` command or imported to
build and encode a :class:`~convert2cbmpa.core.BmpaDocument` directly.
"""

__version__ = "1.0.0"

from .core import AnimationClip, BmpaDocument, ConversionOutcome, ConversionSettings
from .core.bmpa_encoder import convert_pixels, encode_document, write_document
from .core.metadata_loader import load_metadata, parse_metadata
from .core.pipeline import convert

__all__ = [
    "AnimationClip",
    "BmpaDocument",
    "ConversionOutcome",
    "ConversionSettings",
    "convert",
    "convert_pixels",
    "encode_document",
    "load_metadata",
    "parse_metadata",
    "write_document",
]
