from .ids import (
    PLACEHOLDER_PREFIX,
    ROOT_ID,
    Committed,
    FolderRef,
    Pending,
    is_placeholder_id,
    is_root,
    placeholder_id,
    ref_for,
    ref_to_str,
)
from .mime import FOLDER_MIME, FileKind, is_folder, kind_from_mime
from .time import now_utc, to_rfc3339

__all__ = [
    "ROOT_ID",
    "PLACEHOLDER_PREFIX",
    "Pending",
    "Committed",
    "FolderRef",
    "is_placeholder_id",
    "is_root",
    "placeholder_id",
    "ref_for",
    "ref_to_str",
    "FOLDER_MIME",
    "FileKind",
    "is_folder",
    "kind_from_mime",
    "now_utc",
    "to_rfc3339",
]
