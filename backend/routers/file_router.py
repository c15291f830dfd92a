import asyncio
import logging
import os
import shutil
import uuid
from typing import List, Optional

from fastapi import APIRouter, UploadFile, File, Form, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session

from config import Config
from models.database import get_db
from models import storage
from schemas import ConvertRequest
from session import SessionContext, get_session_context
from services.convert_service import ConversionError, dispatch, write_placeholder_document
from services.format_service import read_preview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files")


class UploadTooLarge(Exception):
    pass


def upload_path(file_id: str) -> str | None:
    """Path of an id under the upload folder; None for anything that is not a plain file name."""
    if not file_id or file_id in (".", "..") or os.path.basename(file_id) != file_id:
        return None
    return os.path.join(Config.UPLOAD_DIR, file_id)


CHUNK_SIZE = 1024 * 1024


def _save_upload(file: UploadFile, path: str) -> int:
    """Copy an upload to disk, giving up as soon as it passes MAX_UPLOAD_SIZE."""
    size = 0
    with open(path, "wb") as out:
        while True:
            chunk = file.file.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > Config.MAX_UPLOAD_SIZE:
                break
            out.write(chunk)
    if size > Config.MAX_UPLOAD_SIZE:
        os.remove(path)
        raise UploadTooLarge(file.filename)
    return size


def _discard_uploads(file_ids):
    for file_id in file_ids:
        path = os.path.join(Config.UPLOAD_DIR, file_id)
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


async def _store_upload(file: UploadFile, from_format: str, to_format: str) -> str:
    file_id = uuid.uuid4().hex
    path = os.path.join(Config.UPLOAD_DIR, file_id)

    size = await run_in_threadpool(_save_upload, file, path)
    logger.info("File processed: %s, Size: %d bytes", file.filename, size)

    # tiny uploads are most likely empty or broken
    if size < Config.SMALL_FILE_THRESHOLD:
        logger.info("File %s is too small (%d bytes). Creating placeholder content.", file.filename, size)
        name = os.path.splitext(os.path.basename(file.filename or file_id))[0]
        await run_in_threadpool(
            write_placeholder_document,
            path,
            from_format,
            f"Content from {name} for testing conversion to {to_format}.",
        )
    return file_id


# -------------------------------
# 1) upload
# -------------------------------
@router.post("/upload")
async def upload_files(
    files: Optional[List[UploadFile]] = File(None),
    from_format: str = Form("unknown", alias="fromFormat"),
    to_format: str = Form("unknown", alias="toFormat"),
    operation: str = Form("convert"),
):
    if not files:
        return JSONResponse(status_code=400, content={"message": "No files uploaded"})
    if len(files) > Config.MAX_UPLOAD_FILES:
        return JSONResponse(
            status_code=400,
            content={"message": f"Too many files (max {Config.MAX_UPLOAD_FILES})"},
        )

    logger.info("Processing %d files (%s -> %s, %s)", len(files), from_format, to_format, operation)
    os.makedirs(Config.UPLOAD_DIR, exist_ok=True)

    results = await asyncio.gather(
        *(_store_upload(f, from_format, to_format) for f in files),
        return_exceptions=True,
    )
    errors = [r for r in results if isinstance(r, BaseException)]
    if errors:
        # a request is stored whole or not at all
        await run_in_threadpool(_discard_uploads, [r for r in results if isinstance(r, str)])
        too_large = next((e for e in errors if isinstance(e, UploadTooLarge)), None)
        if too_large is not None:
            return JSONResponse(status_code=413, content={"message": f"File too large: {too_large}"})
        logger.error("Error uploading files", exc_info=errors[0])
        return JSONResponse(status_code=500, content={"message": "Error uploading files"})

    return {"message": "Files uploaded successfully", "fileIds": list(results)}


# -------------------------------
# 2) convert
# -------------------------------
@router.post("/convert")
async def convert_files(
    payload: ConvertRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    if not payload.file_ids:
        return JSONResponse(status_code=400, content={"message": "No files to convert"})

    options = payload.options
    logger.info("Processing file conversion: %s %s", payload.file_ids, options.model_dump(by_alias=True))

    input_paths = []
    for file_id in payload.file_ids:
        path = upload_path(file_id)
        if path is None:
            logger.warning("Ignoring invalid file id: %r", file_id)
            continue
        input_paths.append(path)

    try:
        results = await dispatch(input_paths, Config.CONVERTED_DIR, options)
    except (ConversionError, OSError) as e:
        logger.exception("Conversion error")
        return JSONResponse(status_code=500, content={"message": f"Error during file conversion: {e}"})

    download_urls = []
    for result in results:
        # converted files are served from the upload folder under their own name
        download_id = os.path.basename(result.output_path)
        download_path = os.path.join(Config.UPLOAD_DIR, download_id)
        if os.path.abspath(result.output_path) != os.path.abspath(download_path):
            await run_in_threadpool(shutil.copyfile, result.output_path, download_path)

        url = f"/api/files/download/{download_id}?format={options.to_format}"
        download_urls.append(url)

        storage.create_converted_file(
            db,
            user_id=ctx.user_id,
            original_filename=", ".join(os.path.basename(p) for p in result.source_paths),
            converted_filename=download_id,
            original_format=options.from_format,
            converted_format=options.to_format,
            operation=options.operation,
            file_size=os.path.getsize(result.output_path),
            download_url=url,
        )

    preview_content = ""
    if results:
        try:
            preview_content = await run_in_threadpool(read_preview, results[0].output_path)
        except Exception as e:
            logger.warning("Error reading file for preview: %s", e)

    return {
        "message": "Files converted successfully",
        "downloadUrls": download_urls,
        "previewContent": preview_content,
    }


# -------------------------------
# 3) download / preview
# -------------------------------
@router.get("/download/{file_id}")
def download_file(file_id: str, format: str = Query("txt")):
    path = upload_path(file_id)
    if path is None or not os.path.exists(path):
        logger.error("File not found: %s", file_id)
        return JSONResponse(status_code=404, content={"message": "File not found"})
    if not os.path.isfile(path):
        return JSONResponse(status_code=404, content={"message": "Not a valid file"})

    return FileResponse(path, filename=f"converted_file.{format}")


@router.get("/preview/{file_id}")
def preview_file(file_id: str):
    path = upload_path(file_id)
    if path is None or not os.path.exists(path):
        logger.error("File not found for preview: %s", file_id)
        return JSONResponse(status_code=404, content={"message": "File not found"})
    if not os.path.isfile(path):
        return JSONResponse(status_code=404, content={"message": "Not a valid file"})

    try:
        content = read_preview(path)
    except Exception:
        logger.exception("Error previewing file %s", path)
        return JSONResponse(status_code=500, content={"message": "Error previewing file"})
    return PlainTextResponse(content)


@router.get("/history")
def conversion_history(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return [record.to_dict() for record in storage.get_converted_files(db, ctx.user_id)]
