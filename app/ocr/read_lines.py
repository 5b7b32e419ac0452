# app/ocr/read_lines.py
from typing import Any, Dict, List

from app.core.logger import get_logger
from app.ocr.boundaries import TextLine

logger = get_logger("read_lines")


def line_from_record(record: Dict[str, Any]) -> TextLine | None:
    """
    One Read API line -> TextLine.
    boundingBox is [x1, y1, x2, y2, x3, y3, x4, y4], clockwise from top-left,
    so y1 is the top edge and y4 (index 7) the bottom-left corner.
    """
    box = record.get("boundingBox") or []
    if len(box) < 8:
        logger.debug("Skipping line without a full bounding box: %r", record.get("text"))
        return None
    return TextLine(
        text=record.get("text") or "",
        y=box[1],
        height=box[7] - box[1],
    )


def lines_from_read_result(payload: Dict[str, Any] | None) -> List[TextLine]:
    """
    Flatten analyzeResult.readResults[*].lines[*] in reading order
    (page by page, top to bottom as returned by the service).
    """
    read_results = ((payload or {}).get("analyzeResult") or {}).get("readResults") or []

    lines: List[TextLine] = []
    for page in read_results:
        for record in page.get("lines") or []:
            line = line_from_record(record)
            if line is not None:
                lines.append(line)
    return lines
