from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Tuple
import base64
import io

from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError

from intake.schemas import VITALS_REQUIRED_MESSAGES, VitalsInput
from intake.state import PendingImage
from intake.utils.logging import get_logger

logger = get_logger("forms")


def validate_vitals(raw: Mapping[str, Any]) -> Tuple[Optional[VitalsInput], Dict[str, str]]:
    """
    Check the six vitals fields for presence.

    Returns the parsed form and an empty dict, or ``None`` and a message per
    failing field. Values are never parsed as numbers.
    """
    try:
        return VitalsInput.model_validate(dict(raw)), {}
    except ValidationError as ve:
        errors: Dict[str, str] = {}
        for err in ve.errors():
            field = str(err["loc"][0]) if err.get("loc") else ""
            message = VITALS_REQUIRED_MESSAGES.get(field)
            if message is None:
                continue
            errors.setdefault(field, message)
        if not errors:
            # Nothing maps to a known field; surface the raw validation failure
            raise
        logger.info(f"Vitals form rejected fields={sorted(errors)}")
        return None, errors


def is_image_type(content_type: str | None) -> bool:
    return bool(content_type) and content_type.lower().startswith("image/")


def _data_url(data: bytes, content_type: str) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def _dimensions(data: bytes) -> Tuple[Optional[int], Optional[int]]:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError):
        return None, None


def decode_image(data: bytes, content_type: str, filename: str | None = None) -> PendingImage:
    """Build the displayable preview for a picked file. The bytes are kept as-is."""
    width, height = _dimensions(data)
    return PendingImage(
        data=data,
        content_type=content_type,
        filename=filename,
        preview=_data_url(data, content_type),
        width=width,
        height=height,
    )
