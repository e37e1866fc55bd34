"""Upload sources: a file on disk or an already-open byte stream."""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass
from typing import IO, Any, Mapping, Optional, Union

from .exceptions import UnsupportedInputError

DEFAULT_MIME = "application/octet-stream"


def guess_mime(filename: str) -> str:
    mime, _ = mimetypes.guess_type(filename)
    return mime or DEFAULT_MIME


@dataclass(frozen=True)
class FilePath:
    path: str

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)

    @property
    def mime(self) -> str:
        return guess_mime(self.path)


@dataclass(frozen=True)
class ByteStream:
    handle: IO[Any]
    filename: str
    mime: Optional[str] = None

    @property
    def content_type(self) -> str:
        return self.mime or guess_mime(self.filename)


UploadSource = Union[FilePath, ByteStream]


def to_upload_source(source: Any, attributes: Optional[Mapping[str, Any]] = None) -> UploadSource:
    """
    Normalize what the caller handed to ``upload``.

    - str / os.PathLike     -> FilePath
    - object with .read()   -> ByteStream (needs attributes["filename"],
                               optional attributes["type"] for the MIME type)
    - FilePath / ByteStream -> returned unchanged
    """
    attributes = attributes or {}

    if isinstance(source, (FilePath, ByteStream)):
        return source

    if isinstance(source, (str, os.PathLike)):
        return FilePath(os.fspath(source))

    if callable(getattr(source, "read", None)):
        filename = attributes.get("filename")
        if not filename:
            raise UnsupportedInputError("A 'filename' attribute is required when uploading a file-like object")
        return ByteStream(handle=source, filename=str(filename), mime=attributes.get("type"))

    raise UnsupportedInputError(f"Cannot upload object of type {type(source).__name__}")
