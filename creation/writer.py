# creation/writer.py

import logging
from pathlib import Path
from typing import Optional

from creation.models import TemplateResult

logger = logging.getLogger(__name__)

CARET_MARKER = "$"


def render_template(template_text: Optional[str], marker: str = CARET_MARKER) -> TemplateResult:
    """Removes the first caret marker from the template and records where it was."""
    if not template_text:
        return TemplateResult()

    index = template_text.find(marker)
    if index == -1:
        return TemplateResult(text=template_text)

    text = template_text[:index] + template_text[index + len(marker):]
    return TemplateResult(text=text, caret_offset=index)


def write_file(path: Path, template_text: Optional[str] = None, marker: str = CARET_MARKER) -> int:
    """
    Creates `path` with the template content and returns the caret offset.

    The file is written as UTF-8 without a byte-order mark and newlines are
    kept exactly as they appear in the template. The file is opened in
    exclusive-create mode, so an existing file raises FileExistsError.
    """
    result = render_template(template_text, marker)
    with open(path, "x", encoding="utf-8", newline="") as f:
        f.write(result.text)
    logger.debug(f"Wrote {len(result.text)} characters to '{path}' (caret at {result.caret_offset})")
    return result.caret_offset
