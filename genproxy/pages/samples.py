"""
Purpose:
- Discover the sample images bundled under the static images directory.
- Only base filenames are returned; the page links them under /static/images/.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

def list_sample_images(images_dir: Path, pattern: str) -> List[str]:
    """
    Base filenames in images_dir matching pattern, in sorted scan order.
    A failed scan is logged and yields an empty list.
    """
    try:
        matches = sorted(p for p in Path(images_dir).glob(pattern) if p.is_file())
    except (OSError, ValueError) as e:
        logger.error("Error loading sample images from %s: %s", images_dir, e)
        return []
    return [p.name for p in matches]
