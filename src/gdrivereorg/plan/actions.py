"""Plan actions for gdrivereorg."""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """Operations a reorganization plan can contain."""

    CREATE_FOLDER = "create"
    MOVE = "move"
    DELETE_FOLDER = "delete"


class EmptyParentPolicy(str, Enum):
    """What the diff does with a move whose new parent is empty or unknown."""

    SKIP = "skip"
    RAISE = "raise"
