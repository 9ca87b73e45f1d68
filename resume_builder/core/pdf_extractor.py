from io import BytesIO
from typing import Any, List, Tuple
import logging
import re
import warnings

import pdfplumber

from resume_builder.core.errors import DocumentExtractionError

logger = logging.getLogger(__name__)

# pdfminer is chatty about CropBox/font issues that don't affect text
logging.getLogger("pdfminer").setLevel(logging.ERROR)
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

CID_RE = re.compile(r"\(cid:\d+\)")
ALPHA_TOKEN_RE = re.compile(r"[A-Za-z]+")

DEFAULT_X_TOLERANCES = (1.5, 2, 2.5, 3)
LINE_Y_TOLERANCE = 3


def _page_words_to_text(page: Any, *, x_tolerance: float) -> str:
    """
    Rebuild page text from word boxes: group words by rounded `top`, order
    each group left to right, join with single spaces.
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=2,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""

    words.sort(key=lambda w: (round(w["top"] / LINE_Y_TOLERANCE), w["x0"]))
    lines: List[str] = []
    current_key = None
    current_words: List[str] = []

    for w in words:
        key = round(w["top"] / LINE_Y_TOLERANCE)
        if current_key is None or key == current_key:
            current_words.append(w["text"])
        else:
            lines.append(" ".join(current_words))
            current_words = [w["text"]]
        current_key = key

    if current_words:
        lines.append(" ".join(current_words))

    return "\n".join(lines)


def _artifact_score(text: str) -> float:
    """
    Lower is better. Penalizes glued words (18+ letter runs), character
    fragmentation (lots of single letters) and empty output.
    """
    tokens = ALPHA_TOKEN_RE.findall(text)
    if not tokens:
        return 1e9
    glued = sum(1 for t in tokens if len(t) >= 18)
    singles = sum(1 for t in tokens if len(t) == 1)
    return glued * 10 + max(0, singles - 10) * 3


def _best_page_text(page: Any, x_tolerances: Tuple[float, ...] = DEFAULT_X_TOLERANCES) -> str:
    """Try a few x_tolerance values and keep the least damaged text."""
    candidates = []
    for xt in x_tolerances:
        txt = _page_words_to_text(page, x_tolerance=xt)
        candidates.append((_artifact_score(txt), xt, txt))
    candidates.sort(key=lambda c: (c[0], c[1]))
    score, xt, txt = candidates[0]
    logger.debug(f"page {page.page_number}: x_tolerance={xt} score={score}")
    return txt


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Plain text of a PDF's text layer, one line per visual line, pages joined
    by newlines. Scanned (image-only) PDFs yield an empty string; OCR is not
    attempted.
    """
    try:
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            pages = [_best_page_text(page) for page in pdf.pages]
    except Exception as e:
        logger.warning(f"PDF text extraction failed: {e}")
        raise DocumentExtractionError("pdf", f"Failed to parse PDF file: {e}") from e

    return CID_RE.sub("", "\n".join(pages))
