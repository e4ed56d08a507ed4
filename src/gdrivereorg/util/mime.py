from __future__ import annotations

from enum import Enum

FOLDER_MIME: str = "application/vnd.google-apps.folder"

DOCUMENT_MIMES: set[str] = {
    "application/vnd.google-apps.document",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.oasis.opendocument.text",
    "application/rtf",
    "text/plain",
}

SPREADSHEET_MIMES: set[str] = {
    "application/vnd.google-apps.spreadsheet",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.oasis.opendocument.spreadsheet",
    "text/csv",
}

PRESENTATION_MIMES: set[str] = {
    "application/vnd.google-apps.presentation",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "application/vnd.oasis.opendocument.presentation",
}

PDF_MIME: str = "application/pdf"


class FileKind(str, Enum):
    """Kind of a Drive item, derived from its MIME type."""

    FOLDER = "folder"
    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"
    PDF = "pdf"
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


# Bare kind names seen in hand-written or model-produced listings.
SHORT_KINDS: dict[str, FileKind] = {
    "doc": FileKind.DOCUMENT,
    "docs": FileKind.DOCUMENT,
    "document": FileKind.DOCUMENT,
    "sheet": FileKind.SPREADSHEET,
    "sheets": FileKind.SPREADSHEET,
    "spreadsheet": FileKind.SPREADSHEET,
    "slide": FileKind.PRESENTATION,
    "slides": FileKind.PRESENTATION,
    "presentation": FileKind.PRESENTATION,
    "pdf": FileKind.PDF,
    "image": FileKind.IMAGE,
    "video": FileKind.VIDEO,
}


def is_folder(mime_type: str | None) -> bool:
    return mime_type == FOLDER_MIME


def kind_from_mime(mime_type: str | None) -> FileKind:
    """
    Map a MIME type to a FileKind.

    Exact matches win, bare kind names ("doc", "sheet", ...) next; then
    the image/ and video/ prefixes; then the same substring fallbacks
    Drive UIs use for unlisted office types.
    """
    if not mime_type:
        return FileKind.OTHER

    if mime_type == FOLDER_MIME:
        return FileKind.FOLDER
    if mime_type == PDF_MIME:
        return FileKind.PDF
    if mime_type in DOCUMENT_MIMES:
        return FileKind.DOCUMENT
    if mime_type in SPREADSHEET_MIMES:
        return FileKind.SPREADSHEET
    if mime_type in PRESENTATION_MIMES:
        return FileKind.PRESENTATION

    short = SHORT_KINDS.get(mime_type.strip().lower())
    if short is not None:
        return short

    if mime_type.startswith("image/"):
        return FileKind.IMAGE
    if mime_type.startswith("video/"):
        return FileKind.VIDEO

    if "spreadsheet" in mime_type:
        return FileKind.SPREADSHEET
    if "presentation" in mime_type:
        return FileKind.PRESENTATION
    if "document" in mime_type:
        return FileKind.DOCUMENT

    return FileKind.OTHER
