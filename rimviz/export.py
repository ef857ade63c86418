"""Export requests and their handling."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, MutableSequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = (1920, 1080)
SCREENSHOT_DIR = "screenshots"


class ExportFormat(Enum):
    PNG = "png"
    SVG = "svg"
    GIF = "gif"
    MP4 = "mp4"


@dataclass
class ExportRequest:
    format: ExportFormat
    filename: str
    resolution: tuple[int, int] = DEFAULT_RESOLUTION


def request_png_screenshot(
    requests: MutableSequence[ExportRequest], filename: Optional[str] = None
) -> ExportRequest:
    """Queue a PNG screenshot, naming it by the current time if no name is given."""
    if filename is None:
        filename = f"screenshot_{int(time.time())}.png"
    request = ExportRequest(ExportFormat.PNG, filename, DEFAULT_RESOLUTION)
    requests.append(request)
    return request


def handle_export_requests(
    requests: MutableSequence[ExportRequest],
    save_screenshot: Callable[[Path], object],
    base_dir: Union[str, os.PathLike] = ".",
) -> list[Path]:
    """Process and drain queued requests; return the paths handed to save_screenshot."""
    pending = list(requests)
    requests.clear()
    saved: list[Path] = []
    for request in pending:
        if request.format is ExportFormat.PNG:
            path = Path(base_dir) / SCREENSHOT_DIR / request.filename
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.error("Failed to create screenshots directory: %s", exc)
                continue
            save_screenshot(path)
            logger.info("Screenshot requested: %s", path)
            saved.append(path)
        else:
            logger.warning(
                "%s export not yet implemented: %s", request.format.name, request.filename
            )
    return saved