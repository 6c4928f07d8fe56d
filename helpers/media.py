"""
Local storage for uploaded note videos.

Stored references are paths relative to ``media_root`` such as
``uploads/videos/1718000000000-clip.mp4``; anything starting with ``http``
is an external URL and is never touched.
"""

import os
import time
from typing import Optional

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from settings import get_settings, logger


def is_local_media(video_path: Optional[str]) -> bool:
    return bool(video_path) and not video_path.startswith("http")


def _absolute(video_path: str) -> str:
    return os.path.join(get_settings().media_root, video_path)


def _write_file(target: str, content: bytes) -> None:
    with open(target, "wb") as f:
        f.write(content)


async def save_upload(upload: UploadFile) -> str:
    """Write an uploaded file to disk and return its relative reference."""
    settings = get_settings()
    original_name = os.path.basename(upload.filename or "upload")
    filename = f"{int(time.time() * 1000)}-{original_name}"
    video_path = f"{settings.upload_dir.rstrip('/')}/{filename}"

    target = _absolute(video_path)
    os.makedirs(os.path.dirname(target), exist_ok=True)
    content = await upload.read()
    await run_in_threadpool(_write_file, target, content)

    logger.info("Stored uploaded video", extra={"video_path": video_path, "size": len(content)})
    return video_path


def remove_media(video_path: Optional[str]) -> bool:
    """Delete a previously stored local video.

    Returns False when nothing was removed. Failures are logged here and
    callers are expected to ignore the result: a leftover file never
    blocks a note update or deletion.
    """
    if not is_local_media(video_path):
        return False

    try:
        os.remove(_absolute(video_path))
    except OSError as e:
        logger.warning("Error deleting video file", extra={
            "video_path": video_path,
            "error": str(e)
        })
        return False

    logger.info("Deleted video file", extra={"video_path": video_path})
    return True
