from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from packages.core.torrent_files import FilePriority


class TorrentFileIn(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    index: int = Field(ge=0)
    name: str = Field(min_length=1)
    size: int = Field(ge=0)
    progress: float = Field(ge=0, le=1)
    priority: int = FilePriority.NORMAL
    is_seed: Optional[bool] = None
    piece_range: Optional[Tuple[int, int]] = None
    availability: Optional[float] = None


class FileListRequest(BaseModel):
    files: List[TorrentFileIn] = Field(default_factory=list)


class FlattenRequest(FileListRequest):
    folder_path: Optional[str] = None


class NodeLookupRequest(FileListRequest):
    path: str


class FolderPriorityRequest(FileListRequest):
    folder_path: str
    priority: int


class FilePriorityRequest(BaseModel):
    file_index: int = Field(ge=0)
    priority: int


class FileTreeNode(BaseModel):
    name: str
    path: str
    type: Literal["dir", "file"]
    size_bytes: int = 0
    size_human: Optional[str] = None
    progress: float = 0
    file_count: Optional[int] = None
    priority: Optional[int] = None
    file_index: Optional[int] = None
    children: Optional[List[FileTreeNode]] = None


class FileTreeResponse(BaseModel):
    file_count: int
    total_size_bytes: int
    total_size_human: str
    files_tree_summary: str = ""
    auto_expand: bool = True
    files_tree: List[FileTreeNode] = Field(default_factory=list)


class PriorityChangeResponse(BaseModel):
    file_ids: List[int] = Field(default_factory=list)
    priority: FilePriority
    label: str
    id_param: str = ""
