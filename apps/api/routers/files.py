import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from apps.api import schemas
from packages.core.file_tree import (
    DuplicatePathError,
    FolderNode,
    build_file_tree,
    count_files,
    file_tree_summary,
    find_node_by_path,
    flatten_file_tree,
    node_to_payload,
    tree_to_payload,
)
from packages.core.priority import (
    PriorityChange,
    plan_file_priority,
    plan_folder_node_priority,
    should_auto_expand,
)
from packages.core.torrent_files import TorrentFile, format_bytes, parse_torrent_files

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


def _records(payload: schemas.FileListRequest) -> List[TorrentFile]:
    return parse_torrent_files(f.model_dump() for f in payload.files)


def _build(files: List[TorrentFile]):
    try:
        return build_file_tree(files)
    except DuplicatePathError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _change_response(change: PriorityChange) -> schemas.PriorityChangeResponse:
    return schemas.PriorityChangeResponse(
        file_ids=change.file_ids,
        priority=change.priority,
        label=change.label,
        id_param=change.id_param(),
    )


@router.post("/tree", response_model=schemas.FileTreeResponse)
def file_tree(payload: schemas.FileListRequest) -> schemas.FileTreeResponse:
    files = _records(payload)
    tree = _build(files)
    total = sum(f.size for f in files)
    file_count = count_files(tree)
    return schemas.FileTreeResponse(
        file_count=file_count,
        total_size_bytes=total,
        total_size_human=format_bytes(total),
        files_tree_summary=file_tree_summary(tree),
        auto_expand=should_auto_expand(file_count),
        files_tree=tree_to_payload(tree),
    )


@router.post("/flatten", response_model=List[schemas.TorrentFileIn])
def flatten(payload: schemas.FlattenRequest):
    tree = _build(_records(payload))
    return [
        schemas.TorrentFileIn.model_validate(f)
        for f in flatten_file_tree(tree, payload.folder_path)
    ]


@router.post("/node", response_model=schemas.FileTreeNode)
def lookup_node(payload: schemas.NodeLookupRequest):
    tree = _build(_records(payload))
    node = find_node_by_path(tree, payload.path)
    if node is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Path not found"
        )
    return node_to_payload(node)


@router.post("/priority/folder", response_model=schemas.PriorityChangeResponse)
def folder_priority(payload: schemas.FolderPriorityRequest):
    tree = _build(_records(payload))
    node = find_node_by_path(tree, payload.folder_path)
    if node is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Folder not found"
        )
    if not isinstance(node, FolderNode):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Path is not a folder"
        )
    try:
        change = plan_folder_node_priority(node, payload.priority)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    logger.info(
        "Folder %s: priority %s for %d file(s)",
        payload.folder_path,
        change.priority.name,
        len(change.file_ids),
    )
    return _change_response(change)


@router.post("/priority/file", response_model=schemas.PriorityChangeResponse)
def file_priority(payload: schemas.FilePriorityRequest):
    try:
        change = plan_file_priority(payload.file_index, payload.priority)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return _change_response(change)
