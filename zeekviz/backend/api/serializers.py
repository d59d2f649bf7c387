"""
api/serializers.py

Pydantic request / response models for the REST routes.

Record, graph, timeline and stats payloads are built with the
to_dict() methods of the domain models instead, so that conn.log key
names (id.orig_h, orig_bytes, ...) reach the client unchanged.
"""

from __future__ import annotations
from pydantic import BaseModel


class FileIdRequest(BaseModel):
    file_id: str = ""


class UploadResponse(BaseModel):
    success: bool = True
    message: str
    connections_count: int
    filename: str
    file_id: str
    total_files: int


class FileInfo(BaseModel):
    id: str
    filename: str
    upload_time: int
    size: int
    connection_count: int
    is_current: bool


class FilesResponse(BaseModel):
    files: list[FileInfo]
    current_file: str
    total_files: int


class SwitchResponse(BaseModel):
    success: bool = True
    message: str
    current_file: str
    filename: str
    connections_count: int


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
    current_file: str
    total_files: int


class CurrentFileInfo(BaseModel):
    id: str
    filename: str
    upload_time: int
    size: int
