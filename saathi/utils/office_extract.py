import io
from typing import List

import docx
from pptx import Presentation
from pptx.shapes.group import GroupShape


class OfficeExtractionError(ValueError):
    pass


def extract_docx(data: bytes) -> str:
    """
    Texte brut d'un .docx : paragraphes puis cellules de tableaux, séparés par une ligne vide.
    """
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as e:
        raise OfficeExtractionError(str(e)) from e

    blocks = [p.text for p in document.paragraphs if p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                blocks.append(" | ".join(cells))
    return "\n\n".join(blocks)


def _shape_texts(shape) -> List[str]:
    texts: List[str] = []
    if isinstance(shape, GroupShape):
        for sub in shape.shapes:
            texts.extend(_shape_texts(sub))
        return texts

    if shape.has_text_frame:
        for paragraph in shape.text_frame.paragraphs:
            line = "".join(run.text for run in paragraph.runs).strip()
            if line:
                texts.append(line)

    if getattr(shape, "has_table", False):
        for row in shape.table.rows:
            for cell in row.cells:
                if cell.text.strip():
                    texts.append(cell.text.strip())
    return texts


def extract_pptx(data: bytes) -> str:
    """
    Une section "Slide N:" par diapositive contenant du texte (N ne compte que celles-ci).
    """
    try:
        prs = Presentation(io.BytesIO(data))
    except Exception as e:
        raise OfficeExtractionError(str(e)) from e

    sections: List[str] = []
    for slide in prs.slides:
        lines: List[str] = []
        for shape in slide.shapes:
            lines.extend(_shape_texts(shape))
        if lines:
            sections.append(f"Slide {len(sections) + 1}:\n" + "\n".join(lines))
    return "\n\n".join(sections)
