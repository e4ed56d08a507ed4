"""Classifier policy configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from gdrivereorg.errors import InvalidInputError


@dataclass(slots=True, frozen=True)
class CategoryPolicy:
    """
    Group leaf records by kind under one workspace folder.

    Attributes:
        min_group_size: A category folder is created only when at least this
            many records fall into it.
        relocate_existing_folders: Move root-level folders under an
            "existing items" folder inside the workspace.
        collapse_single_category: When a single folder would end up inside the
            workspace, place it at root and skip the workspace folder.
    """

    min_group_size: int = 1
    relocate_existing_folders: bool = True
    collapse_single_category: bool = True

    def __post_init__(self) -> None:
        if self.min_group_size < 1:
            raise ValueError("min_group_size must be >= 1")


@dataclass(slots=True, frozen=True)
class ExtensionPolicy:
    """Group leaf records by lower-cased file extension; input folders are dropped."""


ClassifierPolicy = Union[CategoryPolicy, ExtensionPolicy]

POLICY_NAMES: tuple[str, ...] = ("category", "extension")


def policy_from_name(
    name: str,
    *,
    min_group_size: int = 1,
    relocate_existing_folders: bool = True,
) -> ClassifierPolicy:
    """Build a policy from its configured name."""
    if name == "category":
        return CategoryPolicy(
            min_group_size=min_group_size,
            relocate_existing_folders=relocate_existing_folders,
        )
    if name == "extension":
        return ExtensionPolicy()
    raise InvalidInputError(
        f"Unknown classifier policy: {name}",
        details={"allowed": list(POLICY_NAMES)},
    )
