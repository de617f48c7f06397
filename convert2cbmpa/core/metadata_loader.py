"""Metadata (information file) loading.

The information file is a JSON object describing everything in a bmpa file
that cannot be taken from the image itself::

    {
      "comment": "hero walk cycle",
      "gridW": 32, "gridH": 32,
      "rotatePointX": 16, "rotatePointY": 28,
      "animations": [
        {"baseFrame": 0, "startFrame": 0, "endFrame": 7, "rate": 12}
      ]
    }

Every key is optional, but each animation entry needs all four values.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import UINT16_MAX, AnimationClip, BmpaDocument
from .errors import MetadataParseError, MetadataSchemaError
from ..utils import file_tools, validators

logger = logging.getLogger(__name__)


class BmpaMetadata(BaseModel):
    """Header fields accepted in an information file."""

    model_config = ConfigDict(strict=True)

    comment: str = ""
    grid_w: int = Field(0, alias="gridW", ge=0, le=UINT16_MAX)
    grid_h: int = Field(0, alias="gridH", ge=0, le=UINT16_MAX)
    rotate_point_x: int = Field(0, alias="rotatePointX", ge=0, le=UINT16_MAX)
    rotate_point_y: int = Field(0, alias="rotatePointY", ge=0, le=UINT16_MAX)

    @field_validator("comment")
    @classmethod
    def _reject_nul(cls, value: str) -> str:
        if "\0" in value:
            raise ValueError("comment must not contain a NUL character")
        return value


class AnimationEntry(BaseModel):
    """One element of the ``animations`` array."""

    model_config = ConfigDict(strict=True)

    base_frame: int = Field(alias="baseFrame", ge=0, le=UINT16_MAX)
    start_frame: int = Field(alias="startFrame", ge=0, le=UINT16_MAX)
    end_frame: int = Field(alias="endFrame", ge=0, le=UINT16_MAX)
    rate: int = Field(alias="rate", ge=0, le=UINT16_MAX)

    def to_clip(self) -> AnimationClip:
        return AnimationClip(
            base_frame=self.base_frame,
            start_frame=self.start_frame,
            end_frame=self.end_frame,
            rate=self.rate,
        )


def load_metadata(path: Path, document: Optional[BmpaDocument] = None) -> BmpaDocument:
    """Read an information file from disk and parse it into a document."""

    validators.validate_metadata_path(path)
    try:
        text = file_tools.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataParseError(path, str(exc)) from exc

    logger.debug("Loaded information file %s", path)
    return parse_metadata(text, document, source=path)


def parse_metadata(
    text: str,
    document: Optional[BmpaDocument] = None,
    source: Optional[Path] = None,
) -> BmpaDocument:
    """Populate a document's header and animation table from JSON text.

    Pixels are left untouched. Nothing is written to ``document`` unless the
    whole text validates.
    """

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MetadataParseError(source, str(exc)) from exc

    if not isinstance(payload, dict):
        raise MetadataParseError(source, f"top level must be an object, got {_json_type(payload)}")

    try:
        header = BmpaMetadata.model_validate(payload)
    except ValidationError as exc:
        raise MetadataSchemaError(f"Invalid metadata: {_describe_errors(exc)}") from exc

    clips = _parse_animations(payload.get("animations"), "animations" in payload)

    document = document if document is not None else BmpaDocument()
    document.comment = header.comment
    document.grid_w = header.grid_w
    document.grid_h = header.grid_h
    document.rotate_point_x = header.rotate_point_x
    document.rotate_point_y = header.rotate_point_y
    for clip in clips:
        document.add_animation(clip)

    logger.debug(
        "Parsed metadata: grid=%sx%s rotate=(%s, %s) animations=%s",
        document.grid_w,
        document.grid_h,
        document.rotate_point_x,
        document.rotate_point_y,
        len(clips),
    )
    return document


def _parse_animations(raw: Any, present: bool) -> list[AnimationClip]:
    if not present:
        return []
    if not isinstance(raw, list):
        raise MetadataSchemaError('Error parsing json - "animations" must be an array.')

    clips: list[AnimationClip] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise MetadataSchemaError(f"Animation at {index} must be an object, got {_json_type(entry)}.")
        try:
            clips.append(AnimationEntry.model_validate(entry).to_clip())
        except ValidationError as exc:
            missing = [_field_name(err) for err in exc.errors() if err["type"] == "missing"]
            if missing:
                raise MetadataSchemaError(
                    f"Animation at {index} is missing a value: {', '.join(missing)}"
                ) from exc
            raise MetadataSchemaError(f"Animation at {index} has an invalid value: {_describe_errors(exc)}") from exc
    return clips


def _field_name(error: dict[str, Any]) -> str:
    return ".".join(str(part) for part in error["loc"]) or "<root>"


def _describe_errors(exc: ValidationError) -> str:
    return "; ".join(f"{_field_name(err)}: {err['msg']}" for err in exc.errors())


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
