"""Hierarchical view over the flat file list of a torrent.

The client reports one record per member file with a ``/`` separated path.
``build_file_tree`` turns that list into folders and files, rolls size and
size-weighted progress up into every folder and sorts siblings (folders
first, then by name). The traversal helpers below operate on the finished
tree and never mutate it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from pyuca import Collator

from packages.core.torrent_files import TorrentFile, format_bytes

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"

_collator = Collator()


class DuplicatePathError(ValueError):
    pass


@dataclass
class FileNode:
    name: str
    path: str
    size: int
    progress: float
    priority: int
    file_index: int
    file: TorrentFile = field(repr=False, compare=False)

    @property
    def is_folder(self) -> bool:
        return False


@dataclass
class FolderNode:
    name: str
    path: str
    size: int = 0
    progress: float = 0.0
    children: list["TreeNode"] = field(default_factory=list)

    @property
    def is_folder(self) -> bool:
        return True


TreeNode = Union[FileNode, FolderNode]


def split_path(path: str) -> list[str]:
    return path.split(PATH_SEPARATOR)


def _strict_paths_default() -> bool:
    return os.getenv("FILETREE_STRICT_PATHS", "0").lower() in {"1", "true", "yes"}


def _report_duplicate(path: str, strict: bool) -> None:
    if strict:
        raise DuplicatePathError(f"Duplicate path in file list: {path}")
    logger.warning("Duplicate path in file list, keeping both entries: %s", path)


def _attach_files(files: Iterable[TorrentFile], strict: bool) -> list[TreeNode]:
    folders: dict[str, FolderNode] = {}
    file_paths: set[str] = set()
    roots: list[TreeNode] = []

    for f in files:
        parts = split_path(f.name)
        node = FileNode(
            name=parts[-1],
            path=f.name,
            size=f.size,
            progress=f.progress,
            priority=f.priority,
            file_index=f.index,
            file=f,
        )
        if f.name in file_paths or f.name in folders:
            _report_duplicate(f.name, strict)
        file_paths.add(f.name)

        siblings = roots
        current = ""
        for segment in parts[:-1]:
            current = f"{current}{PATH_SEPARATOR}{segment}" if current else segment
            folder = folders.get(current)
            if folder is None:
                if current in file_paths:
                    _report_duplicate(current, strict)
                folder = FolderNode(name=segment, path=current)
                folders[current] = folder
                siblings.append(folder)
            siblings = folder.children
        siblings.append(node)

    return roots


def calculate_folder_stats(nodes: list[TreeNode]) -> None:
    """Roll size and size-weighted progress up into every folder, bottom-up."""
    for node in nodes:
        if not isinstance(node, FolderNode):
            continue
        calculate_folder_stats(node.children)
        total_size = 0
        weighted_progress = 0.0
        for child in node.children:
            total_size += child.size
            weighted_progress += child.size * child.progress
        node.size = total_size
        node.progress = weighted_progress / total_size if total_size > 0 else 0


def _sort_key(node: TreeNode) -> tuple[int, tuple[int, ...], str]:
    # Unicode collation order (DUCET), not code point order.
    return (
        0 if isinstance(node, FolderNode) else 1,
        _collator.sort_key(node.name.casefold()),
        node.name,
    )


def sort_nodes(nodes: list[TreeNode]) -> None:
    """Sort in place: folders first, then by name ignoring case, recursively."""
    nodes.sort(key=_sort_key)
    for node in nodes:
        if isinstance(node, FolderNode):
            sort_nodes(node.children)


def build_file_tree(
    files: Iterable[TorrentFile], *, strict: bool | None = None
) -> list[TreeNode]:
    """Build the sorted, aggregated tree for a torrent's file list.

    Example::

        files = [
            TorrentFile(index=0, name="album/track01.mp3", size=1000, progress=0.5),
            TorrentFile(index=1, name="album/track02.mp3", size=2000, progress=1),
            TorrentFile(index=2, name="cover.jpg", size=500, progress=1),
        ]
        build_file_tree(files)
        # [FolderNode(name="album", size=3000, progress=0.833...),
        #  FileNode(name="cover.jpg", size=500, progress=1)]

    Records sharing a path are all kept unless ``strict`` is set, in which
    case ``DuplicatePathError`` is raised.
    """
    if strict is None:
        strict = _strict_paths_default()
    roots = _attach_files(files, strict)
    if not roots:
        return []
    calculate_folder_stats(roots)
    sort_nodes(roots)
    return roots


def flatten_file_tree(
    nodes: list[TreeNode],
    folder_path: str | None = None,
    out: list[TorrentFile] | None = None,
) -> list[TorrentFile]:
    """Return the file records in the tree, optionally only those under ``folder_path``."""
    if out is None:
        out = []
    for node in nodes:
        if isinstance(node, FolderNode):
            flatten_file_tree(node.children, folder_path, out)
        elif (
            not folder_path
            or node.path == folder_path
            or node.path.startswith(folder_path + PATH_SEPARATOR)
        ):
            out.append(node.file)
    return out


def get_file_indices_from_folder(
    node: TreeNode, out: list[int] | None = None
) -> list[int]:
    if out is None:
        out = []
    if isinstance(node, FolderNode):
        for child in node.children:
            get_file_indices_from_folder(child, out)
    else:
        out.append(node.file_index)
    return out


def find_node_by_path(nodes: list[TreeNode], path: str) -> TreeNode | None:
    for node in nodes:
        if node.path == path:
            return node
        if isinstance(node, FolderNode) and path.startswith(
            node.path + PATH_SEPARATOR
        ):
            found = find_node_by_path(node.children, path)
            if found is not None:
                return found
    return None


def count_files(nodes: list[TreeNode]) -> int:
    count = 0
    for node in nodes:
        if isinstance(node, FolderNode):
            count += count_files(node.children)
        else:
            count += 1
    return count


def get_node_depth(path: str) -> int:
    if not path:
        return 0
    return len(split_path(path)) - 1


def node_to_payload(node: TreeNode) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": node.name,
        "path": node.path,
        "type": "dir" if isinstance(node, FolderNode) else "file",
        "size_bytes": int(node.size),
        "size_human": format_bytes(node.size),
        "progress": node.progress,
    }
    if isinstance(node, FolderNode):
        payload["file_count"] = count_files(node.children)
        payload["children"] = tree_to_payload(node.children)
    else:
        payload["priority"] = node.priority
        payload["file_index"] = node.file_index
    return payload


def tree_to_payload(nodes: list[TreeNode]) -> list[dict[str, Any]]:
    return [node_to_payload(node) for node in nodes]


def file_tree_summary(nodes: list[TreeNode], max_entries: int = 4) -> str:
    names = [node.name for node in nodes[:max_entries] if node.name]
    if not names:
        return ""
    more = max(0, len(nodes) - len(names))
    suffix = f" +{more}" if more else ""
    return ", ".join(names) + suffix


__all__ = [
    "DuplicatePathError",
    "FileNode",
    "FolderNode",
    "TreeNode",
    "build_file_tree",
    "calculate_folder_stats",
    "count_files",
    "file_tree_summary",
    "find_node_by_path",
    "flatten_file_tree",
    "get_file_indices_from_folder",
    "get_node_depth",
    "node_to_payload",
    "sort_nodes",
    "split_path",
    "tree_to_payload",
]
