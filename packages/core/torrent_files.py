from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable


class FilePriority(IntEnum):
    """File priority values used by the torrent client.

    The values are not sequential.
    """

    DO_NOT_DOWNLOAD = 0
    NORMAL = 1
    HIGH = 6
    MAXIMUM = 7


FILE_PRIORITY_LABELS: dict[FilePriority, str] = {
    FilePriority.DO_NOT_DOWNLOAD: "priority.doNotDownload",
    FilePriority.NORMAL: "priority.normal",
    FilePriority.HIGH: "priority.high",
    FilePriority.MAXIMUM: "priority.maximum",
}


@dataclass(frozen=True)
class TorrentFile:
    """One member file of a torrent as reported by the client.

    ``index`` is the client's file id (use it for priority changes, not the
    list position). ``name`` is the path relative to the torrent root.
    """

    index: int
    name: str
    size: int
    progress: float
    priority: int = FilePriority.NORMAL
    is_seed: bool | None = None
    piece_range: tuple[int, int] | None = None
    availability: float | None = None


def parse_torrent_files(rows: Iterable[dict[str, Any]]) -> list[TorrentFile]:
    files: list[TorrentFile] = []
    for row in rows:
        piece_range = row.get("piece_range")
        files.append(
            TorrentFile(
                index=int(row["index"]),
                name=str(row["name"]),
                size=int(row["size"]),
                progress=float(row["progress"]),
                priority=int(row.get("priority", FilePriority.NORMAL)),
                is_seed=row.get("is_seed"),
                piece_range=tuple(piece_range) if piece_range else None,
                availability=row.get("availability"),
            )
        )
    return files


_BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def format_bytes(num: float) -> str:
    value = float(num or 0)
    unit = 0
    while value >= 1024 and unit < len(_BYTE_UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{int(value)} B"
    return f"{value:.2f} {_BYTE_UNITS[unit]}"


__all__ = [
    "FILE_PRIORITY_LABELS",
    "FilePriority",
    "TorrentFile",
    "format_bytes",
    "parse_torrent_files",
]
