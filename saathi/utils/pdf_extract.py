import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pypdf import PdfReader

logger = logging.getLogger(__name__)


class PdfExtractionError(ValueError):
    pass


@dataclass
class PdfText:
    pages: List[str] = field(default_factory=list)
    page_count: int = 0

    def joined(self, sep: str = "\n") -> str:
        return sep.join(self.pages)


def parse_pages_str(pages_str: Optional[str], total_pages: int) -> List[int]:
    """
    "12-24,30" -> [12, ..., 24, 30] (1-based, bornées au document).
    Vide -> toutes les pages. Les morceaux invalides sont ignorés.
    """
    if not pages_str or not pages_str.strip():
        return list(range(1, total_pages + 1))

    pages = set()
    for part in pages_str.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                a, b = part.split("-", 1)
                start, end = int(a), int(b)
                pages.update(range(max(start, 1), min(end, total_pages) + 1))
            else:
                p = int(part)
                if 1 <= p <= total_pages:
                    pages.add(p)
        except ValueError:
            continue
    return sorted(pages)


def extract_pdf(data: bytes, pages: Optional[str] = None) -> PdfText:
    """
    Extrait le texte d'un PDF reçu en mémoire, page par page.
    - pages : "12-24,30" -> sélection de pages
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        total = len(reader.pages)
        texts = [reader.pages[i - 1].extract_text() or "" for i in parse_pages_str(pages, total)]
    except Exception as e:
        logger.warning("PDF illisible: %s", e)
        raise PdfExtractionError(str(e)) from e

    return PdfText(pages=texts, page_count=total)
