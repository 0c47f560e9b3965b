"""Pydantic models for request/response validation"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ResolveRequest(BaseModel):
    url: Optional[str] = None
    format: Optional[str] = None


class VideoDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str
    author: str
    length_seconds: str = Field(alias="lengthSeconds")
    view_count: str = Field(alias="viewCount")
    thumbnail: str


class FormatDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    itag: str
    quality: str
    container: str
    codecs: str
    url: str


class ResolveResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_details: VideoDetails = Field(alias="videoDetails")
    formats: List[FormatDescriptor]


class ErrorResponse(BaseModel):
    error: str
