from apps.api.schemas.models import (
    FileListRequest,
    FilePriorityRequest,
    FileTreeNode,
    FileTreeResponse,
    FlattenRequest,
    FolderPriorityRequest,
    NodeLookupRequest,
    PriorityChangeResponse,
    TorrentFileIn,
)

__all__ = [
    "FileListRequest",
    "FilePriorityRequest",
    "FileTreeNode",
    "FileTreeResponse",
    "FlattenRequest",
    "FolderPriorityRequest",
    "NodeLookupRequest",
    "PriorityChangeResponse",
    "TorrentFileIn",
]
