# app/schemas/media.py
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

MediaKind = Literal["image", "gif", "video"]


class MediaItem(BaseModel):
    name: str
    path: str                       # POSIX, relative to the media root
    url: str                        # /media/<percent-encoded path>
    kind: MediaKind
    size: int
    modified: float                 # epoch milliseconds


class FolderCounts(BaseModel):
    images: int = 0
    gifs: int = 0
    videos: int = 0
    subfolders: int = 0


class FolderPreview(BaseModel):
    name: str
    path: str
    modified: float
    counts: FolderCounts
    previews: List[MediaItem] = []


class FolderInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    absolute_path: str = Field(alias="absolutePath")


class BreadcrumbEntry(BaseModel):
    name: str
    path: str


class FolderTotals(BaseModel):
    media: int
    subfolders: int


class FolderPayload(BaseModel):
    folder: FolderInfo
    breadcrumb: List[BreadcrumbEntry]
    subfolders: List[FolderPreview]
    media: List[MediaItem]
    totals: FolderTotals
