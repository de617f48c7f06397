"""Single-shot image to bmpa conversion."""

from __future__ import annotations

import logging

from . import BmpaDocument, ConversionOutcome, ConversionSettings
from . import bmpa_encoder, image_source, metadata_loader

logger = logging.getLogger(__name__)


def convert(settings: ConversionSettings) -> ConversionOutcome:
    """Run metadata loading, decoding, pixel conversion and writing in order.

    The first failure propagates and nothing after it runs; the output file is
    only opened once the whole document has been built.
    """

    progress = logger.info if settings.verbose else logger.debug

    document = BmpaDocument()
    if settings.metadata_path is not None:
        progress("Using info file: %s", settings.metadata_path)
        metadata_loader.load_metadata(settings.metadata_path, document)

    progress("Loading image %s", settings.input_path)
    source = image_source.decode_image(settings.input_path).unwrap()

    progress("Converting %sx%s pixels", source.width, source.height)
    document.set_pixels(bmpa_encoder.convert_pixels(source))

    progress("Writing cbmpa %s", settings.output_path)
    written = bmpa_encoder.write_document(document, settings.output_path)

    return ConversionOutcome(
        output_path=settings.output_path,
        width=document.width,
        height=document.height,
        animation_count=document.animation_count,
        bytes_written=written,
    )
