"""Input preprocessing utilities for route downloads."""

import os
import re
import logging
from pathlib import Path
from typing import Optional, Union

from text_unidecode import unidecode

from .config import GPX_EXTENSION

logger = logging.getLogger(__name__)

# German spellings the generic transliteration would flatten to a single vowel
UMLAUTS = {'ä': 'ae', 'ö': 'oe', 'ü': 'ue', 'ß': 'ss'}


def create_slug(text: str) -> str:
    """Convert a route title to a filename-friendly slug.

    "Via Gottardo – Chiasso" becomes "via-gottardo-chiasso" and
    "Höhenweg Zürich" becomes "hoehenweg-zuerich".
    """
    text = text.lower()
    text = ''.join(UMLAUTS.get(char, char) for char in text)
    text = unidecode(text).lower()
    text = re.sub(r'[^a-z0-9]+', '-', text)
    return text.strip('-')


def default_filename(route_name: str, fallback: str) -> str:
    slug = create_slug(route_name) or create_slug(fallback)
    return slug + GPX_EXTENSION


def resolve_output_path(output: Optional[Union[str, Path]], filename: str) -> Path:
    """Decide where the GPX file goes.

    Args:
        output: User supplied path, a directory, or None for the working directory
        filename: Name to use when output is missing or a directory

    Returns:
        Path of the file to write
    """
    if not output:
        return Path(filename)

    text = str(output)
    path = Path(output)
    if path.is_dir() or text.endswith(('/', os.sep)):
        logger.debug(f"{text} is a directory, writing {filename} into it")
        return path / filename
    return path
