# localmedia/schemas.py
from pydantic import BaseModel
from typing import Optional


class OkOut(BaseModel):
    ok: bool = True


class ImageOut(BaseModel):
    name: str
    url: str


class UploadOut(BaseModel):
    url: str


class VideoOut(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    channel: Optional[str] = None
    # medium thumbnail, else default, else missing
    thumbnail: Optional[str] = None
