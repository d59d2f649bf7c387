"""
api/routes/files.py

POST        /api/upload  — multipart conn.log upload (field "logfile")
GET         /api/files   — every loaded file, newest first
POST        /api/switch  — make another file current  {"file_id": ...}
POST|DELETE /api/delete  — drop a file from memory    {"file_id": ...}
"""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from ...config import Settings
from ...ingest.parser import load_records
from ...storage import InvalidOperationError, SessionNotFoundError, SessionStore
from ..deps import get_settings, get_store
from ..serializers import (
    DeleteResponse,
    FileIdRequest,
    FileInfo,
    FilesResponse,
    SwitchResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["files"])


def _require_file_id(body: FileIdRequest) -> str:
    if not body.file_id:
        raise HTTPException(status_code=400, detail="File ID is required")
    return body.file_id


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    logfile: UploadFile = File(...),
    store: SessionStore = Depends(get_store),
    cfg: Settings = Depends(get_settings),
) -> UploadResponse:
    """Parse an uploaded conn.log and make it the current file."""
    limit = cfg.MAX_UPLOAD_BYTES
    if logfile.size is not None and logfile.size > limit:
        raise HTTPException(status_code=413, detail=f"File exceeds {limit} bytes")

    filename = logfile.filename or "upload.log"
    try:
        data = await logfile.read()
        text = data.decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read uploaded file %r: %s", filename, exc)
        raise HTTPException(status_code=500, detail="Failed to read uploaded file") from exc

    if len(data) > limit:
        raise HTTPException(status_code=413, detail=f"File exceeds {limit} bytes")

    logger.info("Received file upload: %s (size: %d bytes)", filename, len(data))
    # CPU-bound on large logs
    records = await run_in_threadpool(load_records, io.StringIO(text))
    file_id = store.ingest(filename, len(data), records)

    return UploadResponse(
        message=f"Successfully loaded {len(records)} connections from {filename}",
        connections_count=len(records),
        filename=filename,
        file_id=file_id,
        total_files=len(store),
    )


@router.get("/files", response_model=FilesResponse)
async def list_files(store: SessionStore = Depends(get_store)) -> FilesResponse:
    """Return every loaded file, most recent upload first."""
    files = [FileInfo(**s.to_dict()) for s in store.list()]
    return FilesResponse(
        files=files,
        current_file=store.current_id or "",
        total_files=len(files),
    )


@router.post("/switch", response_model=SwitchResponse)
async def switch_file(
    body: FileIdRequest,
    store: SessionStore = Depends(get_store),
) -> SwitchResponse:
    """Make *file_id* the file that every view reads from."""
    file_id = _require_file_id(body)
    try:
        session = store.switch_current(file_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="File not found") from exc

    return SwitchResponse(
        message=f"Switched to {session.filename}",
        current_file=session.id,
        filename=session.filename,
        connections_count=session.connection_count,
    )


@router.api_route("/delete", methods=["POST", "DELETE"], response_model=DeleteResponse)
async def delete_file(
    body: FileIdRequest,
    store: SessionStore = Depends(get_store),
) -> DeleteResponse:
    """Remove *file_id* from memory. The last remaining file cannot be deleted."""
    file_id = _require_file_id(body)
    try:
        session = store.delete(file_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="File not found") from exc
    except InvalidOperationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return DeleteResponse(
        message=f"Deleted {session.filename}",
        current_file=store.current_id or "",
        total_files=len(store),
    )
