"""Deterministic local reorganization (used when the AI workflow is unavailable)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from gdrivereorg.models import FileRecord
from gdrivereorg.tree import normalize
from gdrivereorg.util.ids import ROOT_ID, placeholder_id
from gdrivereorg.util.mime import FOLDER_MIME, FileKind
from gdrivereorg.util.time import now_utc

from .policies import CategoryPolicy, ClassifierPolicy, ExtensionPolicy

logger = logging.getLogger(__name__)

NO_EXTENSION_FOLDER_ID: str = placeholder_id("no_extension_folder")


@dataclass(frozen=True)
class _Category:
    slug: str
    name: str
    kinds: tuple[FileKind, ...]


_CATEGORIES: tuple[_Category, ...] = (
    _Category("documents", "Documents & Reports", (FileKind.DOCUMENT,)),
    _Category("analytics", "Spreadsheets & Analysis", (FileKind.SPREADSHEET,)),
    _Category("presentations", "Presentations", (FileKind.PRESENTATION,)),
    _Category("pdf_archive", "PDF Archive", (FileKind.PDF,)),
)
_MEDIA = _Category("media", "Media", (FileKind.IMAGE, FileKind.VIDEO))
_MEDIA_CHILDREN: tuple[_Category, ...] = (
    _Category("images", "Images", (FileKind.IMAGE,)),
    _Category("videos", "Videos", (FileKind.VIDEO,)),
)
_MISC = _Category("misc", "Misc", (FileKind.OTHER,))
_EXISTING = _Category("existing", "Existing Folders", ())


def propose_structure(
    files: Iterable[FileRecord],
    policy: Optional[ClassifierPolicy] = None,
    *,
    today: Optional[date] = None,
) -> list[FileRecord]:
    """
    Propose a reorganized structure for files.

    The input is never mutated: records are normalized into clones first and
    only the clones get new parents. New folders use placeholder IDs.
    """
    use_policy = policy if policy is not None else CategoryPolicy()
    records = normalize(files)

    if isinstance(use_policy, ExtensionPolicy):
        return _by_extension(records)
    if isinstance(use_policy, CategoryPolicy):
        year = (today or now_utc().date()).year
        return _by_category(records, use_policy, year)

    raise TypeError(f"Unsupported classifier policy: {use_policy!r}")


def _new_folder(folder_id: str, name: str, parent_id: str) -> FileRecord:
    return FileRecord(id=folder_id, name=name, mime_type=FOLDER_MIME, parents=[parent_id])


def _by_category(
    records: list[FileRecord],
    policy: CategoryPolicy,
    year: int,
) -> list[FileRecord]:
    workspace_id = placeholder_id(f"ai_workspace_{year}")

    def folder_id(category: _Category) -> str:
        return placeholder_id(f"ai_{category.slug}_{year}")

    by_kind: dict[FileKind, list[FileRecord]] = {}
    for record in records:
        by_kind.setdefault(record.kind, []).append(record)

    def members(category: _Category) -> list[FileRecord]:
        out: list[FileRecord] = []
        for kind in category.kinds:
            out.extend(by_kind.get(kind, []))
        return out

    def qualifies(category: _Category) -> bool:
        return len(members(category)) >= policy.min_group_size

    # Each entry: (folder record, records to reparent into it)
    top_level: list[tuple[FileRecord, list[FileRecord]]] = []
    nested: list[tuple[FileRecord, list[FileRecord]]] = []

    for category in _CATEGORIES:
        if qualifies(category):
            folder = _new_folder(folder_id(category), category.name, workspace_id)
            top_level.append((folder, members(category)))

    media_children = [c for c in _MEDIA_CHILDREN if qualifies(c)]
    if media_children:
        media = _new_folder(folder_id(_MEDIA), _MEDIA.name, workspace_id)
        top_level.append((media, []))
        for category in media_children:
            child = _new_folder(folder_id(category), category.name, media.id)
            nested.append((child, members(category)))

    if qualifies(_MISC):
        folder = _new_folder(folder_id(_MISC), _MISC.name, workspace_id)
        top_level.append((folder, members(_MISC)))

    if policy.relocate_existing_folders:
        root_folders = [
            r for r in by_kind.get(FileKind.FOLDER, []) if r.current_parent == ROOT_ID
        ]
        if root_folders:
            folder = _new_folder(folder_id(_EXISTING), _EXISTING.name, workspace_id)
            top_level.append((folder, root_folders))

    if not top_level:
        logger.info("No category reached the minimum group size; nothing to propose")
        return records

    new_folders: list[FileRecord] = []
    if len(top_level) == 1 and policy.collapse_single_category:
        top_level[0][0].parents = [ROOT_ID]
    else:
        new_folders.append(_new_folder(workspace_id, f"Workspace {year}", ROOT_ID))

    for folder, grouped in top_level + nested:
        new_folders.append(folder)
        for record in grouped:
            record.parents = [folder.id]

    logger.info(
        "Category proposal: %d records, %d new folders",
        len(records),
        len(new_folders),
    )
    return records + new_folders


def _extension_of(name: str) -> Optional[str]:
    dot = name.rfind(".")
    if dot == -1 or dot == len(name) - 1:
        return None
    return name[dot + 1:].lower()


def _by_extension(records: list[FileRecord]) -> list[FileRecord]:
    groups: dict[str, list[FileRecord]] = {}
    no_extension: list[FileRecord] = []
    dropped = 0

    for record in records:
        if record.is_folder:
            dropped += 1
            continue
        ext = _extension_of(record.name)
        if ext is None:
            no_extension.append(record)
        else:
            groups.setdefault(ext, []).append(record)

    out: list[FileRecord] = []
    for ext, grouped in groups.items():
        folder_id = placeholder_id(f"ext_{ext}")
        out.append(_new_folder(folder_id, f"{ext.upper()} files", ROOT_ID))
        for record in grouped:
            record.parents = [folder_id]
            out.append(record)

    if no_extension:
        out.append(_new_folder(NO_EXTENSION_FOLDER_ID, "No extension", ROOT_ID))
        for record in no_extension:
            record.parents = [NO_EXTENSION_FOLDER_ID]
            out.append(record)

    logger.info(
        "Extension proposal: %d extensions, %d without extension, %d folders dropped",
        len(groups),
        len(no_extension),
        dropped,
    )
    return out
