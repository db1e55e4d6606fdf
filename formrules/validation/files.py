"""
formrules Files Validator
=========================

Upload predicates.

The upload record for a field is read from the validated data at the
field path, like any other value. A record is an ``UploadedFile`` or a
mapping with ``name``, ``tmp_name``, ``size``, ``error`` and optional
``type`` keys; ``organize_files`` converts PHP-style multi-file arrays
into that shape.

Example:
    data = {
        "title": "Holiday",
        "photo": UploadedFile(name="beach.png", tmp_name="/tmp/upl1", size=18688),
    }
    validation.set_rule("photo", "uploaded|image|maxSize:64|maxDim:800,600")
    validation.validate(data)

Every rule other than ``uploaded`` requires ``uploaded`` to pass.
"""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from formrules.validation.base import BaseValidator, rule, to_int, to_string

Data = Mapping[str, Any]

UPLOAD_ERR_OK = 0


@dataclass
class UploadedFile:
    """Metadata of one uploaded file."""

    name: str
    tmp_name: str
    size: int = 0
    error: int = UPLOAD_ERR_OK
    type: str = ""

    @classmethod
    def from_value(cls, value: Any) -> Optional[UploadedFile]:
        """Build from a record mapping; None if the value is not an upload."""
        if isinstance(value, UploadedFile):
            return value
        if not isinstance(value, Mapping) or "tmp_name" not in value:
            return None
        try:
            return cls(
                name=str(value.get("name") or ""),
                tmp_name=str(value.get("tmp_name") or ""),
                size=int(value.get("size") or 0),
                error=int(value.get("error") or UPLOAD_ERR_OK),
                type=str(value.get("type") or ""),
            )
        except (TypeError, ValueError):
            return None


class FilesValidator(BaseValidator):
    """Built-in upload validators."""

    @classmethod
    def get_file(cls, field: str, data: Data) -> Optional[UploadedFile]:
        return UploadedFile.from_value(cls.get_value(field, data))

    @classmethod
    def detect_mime(cls, file: UploadedFile) -> str:
        """
        MIME type of the stored file.

        Image types come only from the content, read with Pillow. Other
        files fall back to a guess from the client file name, which is
        never trusted for an image type.
        """
        try:
            with Image.open(file.tmp_name) as image:
                mime = Image.MIME.get(image.format or "")
        except (UnidentifiedImageError, OSError):
            mime = None

        if mime:
            return mime

        guessed, _ = mimetypes.guess_type(file.name or file.tmp_name)
        if not guessed or guessed.startswith("image/"):
            return "application/octet-stream"
        return guessed

    @classmethod
    def image_size(cls, file: UploadedFile) -> Optional[Tuple[int, int]]:
        try:
            with Image.open(file.tmp_name) as image:
                return image.size
        except (UnidentifiedImageError, OSError):
            return None

    @rule("uploaded")
    def uploaded(cls, field: str, data: Data) -> bool:
        """Upload finished without error and the stored file exists."""
        file = cls.get_file(field, data)
        if file is None:
            return False
        return file.error == UPLOAD_ERR_OK and bool(file.tmp_name) and os.path.isfile(file.tmp_name)

    @rule("maxSize")
    def max_size(cls, field: str, data: Data, kilobytes: Any) -> bool:
        if not cls.uploaded(field, data):
            return False
        return cls.get_file(field, data).size <= to_int(kilobytes, "maxSize") * 1024

    @rule("mimes")
    def mimes(cls, field: str, data: Data, *allowed_types: Any) -> bool:
        """Detected MIME type is one of the arguments."""
        if not cls.uploaded(field, data):
            return False
        mime = cls.detect_mime(cls.get_file(field, data))
        return mime in {to_string(item) for item in allowed_types}

    @rule("ext")
    def ext(cls, field: str, data: Data, *allowed_extensions: Any) -> bool:
        """
        Client file name ends with one of the extensions.

        The name comes from the client; prefer ``mimes`` to restrict
        the actual file type.
        """
        if not cls.uploaded(field, data):
            return False
        name = cls.get_file(field, data).name
        return any(name.endswith("." + to_string(extension)) for extension in allowed_extensions)

    @rule("image")
    def image(cls, field: str, data: Data) -> bool:
        if not cls.uploaded(field, data):
            return False
        return cls.detect_mime(cls.get_file(field, data)).startswith("image/")

    @rule("maxDim")
    def max_dim(cls, field: str, data: Data, width: Any, height: Any) -> bool:
        size = cls._dimensions(field, data)
        if size is None:
            return False
        return size[0] <= to_int(width, "maxDim") and size[1] <= to_int(height, "maxDim")

    @rule("minDim")
    def min_dim(cls, field: str, data: Data, width: Any, height: Any) -> bool:
        size = cls._dimensions(field, data)
        if size is None:
            return False
        return size[0] >= to_int(width, "minDim") and size[1] >= to_int(height, "minDim")

    @rule("dim")
    def dim(cls, field: str, data: Data, width: Any, height: Any) -> bool:
        size = cls._dimensions(field, data)
        if size is None:
            return False
        return size == (to_int(width, "dim"), to_int(height, "dim"))

    @classmethod
    def _dimensions(cls, field: str, data: Data) -> Optional[Tuple[int, int]]:
        if not cls.image(field, data):
            return None
        return cls.image_size(cls.get_file(field, data))
