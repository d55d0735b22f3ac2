from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable

from packages.core.file_tree import (
    FolderNode,
    build_file_tree,
    find_node_by_path,
    get_file_indices_from_folder,
)
from packages.core.torrent_files import FILE_PRIORITY_LABELS, FilePriority, TorrentFile

logger = logging.getLogger(__name__)

DEFAULT_AUTO_EXPAND_MAX_FILES = 50


@dataclass(frozen=True)
class PriorityChange:
    """A single priority request for one or more files of a torrent."""

    file_ids: list[int]
    priority: FilePriority

    def id_param(self) -> str:
        # The client takes multiple ids as one pipe separated form value.
        return "|".join(str(i) for i in self.file_ids)

    @property
    def label(self) -> str:
        return FILE_PRIORITY_LABELS[self.priority]


def coerce_priority(value: int) -> FilePriority:
    try:
        return FilePriority(int(value))
    except ValueError as exc:
        raise ValueError(f"Unknown file priority: {value}") from exc


def plan_file_priority(file_index: int, priority: int) -> PriorityChange:
    return PriorityChange(file_ids=[int(file_index)], priority=coerce_priority(priority))


def plan_folder_node_priority(folder: FolderNode, priority: int) -> PriorityChange:
    """Priority change covering every file under an already located folder."""
    target = coerce_priority(priority)
    indices = get_file_indices_from_folder(folder)
    logger.debug(
        "Planned priority %s for %d file(s) under %s",
        target.name,
        len(indices),
        folder.path,
    )
    return PriorityChange(file_ids=indices, priority=target)


def plan_folder_priority(
    files: Iterable[TorrentFile], folder_path: str, priority: int
) -> PriorityChange | None:
    """Collect every file under ``folder_path`` into one priority change.

    Returns None when the path is unknown, names a file, or the folder is empty.
    """
    coerce_priority(priority)
    node = find_node_by_path(build_file_tree(files), folder_path)
    if not isinstance(node, FolderNode):
        logger.info("No folder at %s, skipping priority change", folder_path)
        return None
    change = plan_folder_node_priority(node, priority)
    return change if change.file_ids else None


def should_auto_expand(file_count: int) -> bool:
    limit = int(
        os.getenv("FILETREE_AUTO_EXPAND_MAX_FILES", str(DEFAULT_AUTO_EXPAND_MAX_FILES))
    )
    return file_count <= limit


__all__ = [
    "DEFAULT_AUTO_EXPAND_MAX_FILES",
    "PriorityChange",
    "coerce_priority",
    "plan_file_priority",
    "plan_folder_node_priority",
    "plan_folder_priority",
    "should_auto_expand",
]
