from pydantic import BaseModel, Field
from typing import List, Optional


class Episode(BaseModel):
    """
    A single video file as organised by the server's scanner.
    Immutable from the panel's point of view.
    """
    id: int
    name: str
    file_path: str = Field(..., description="Absolute path to the video file")
    show_name: str
    # Missing when the filename carries no parseable episode number
    episode_number: Optional[int] = None

    class Config:
        frozen = True
        extra = "ignore"


class FileInfo(BaseModel):
    """Flattened projection of an Episode for the 'pick a file to play' list."""
    display_name: str
    file_path: str
    show_name: str

    class Config:
        extra = "ignore"


class FileListResponse(BaseModel):
    files: List[FileInfo] = Field(default_factory=list)

    class Config:
        extra = "ignore"


class ShowListResponse(BaseModel):
    shows: List[str] = Field(default_factory=list)

    class Config:
        extra = "ignore"
