import io


def make_pdf(pages):
    """
    PDF minimal (Helvetica), une page par chaîne de `pages`.
    """
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"",  # /Pages, rempli plus bas
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    kids = []
    for text in pages:
        page_num = len(objects) + 1
        kids.append(b"%d 0 R" % page_num)
        content = b"BT /F1 12 Tf 72 720 Td (" + text.encode("latin-1") + b") Tj ET"
        objects.append(
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Resources << /Font << /F1 3 0 R >> >> /Contents %d 0 R >>" % (page_num + 1)
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream")
    objects[1] = b"<< /Type /Pages /Kids [" + b" ".join(kids) + b"] /Count %d >>" % len(kids)

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for num, obj in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n" % num + obj + b"\nendobj\n")

    xref = out.tell()
    out.write(b"xref\n0 %d\n" % (len(objects) + 1))
    out.write(b"0000000000 65535 f \n")
    for off in offsets:
        out.write(b"%010d 00000 n \n" % off)
    out.write(b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref))
    return out.getvalue()


def make_docx(paragraphs, table=None):
    import docx

    document = docx.Document()
    for p in paragraphs:
        document.add_paragraph(p)
    if table:
        t = document.add_table(rows=len(table), cols=len(table[0]))
        for i, row in enumerate(table):
            for j, value in enumerate(row):
                t.cell(i, j).text = value
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def make_pptx(slides):
    """
    slides : liste de (titre, corps) ; None = diapositive vide.
    """
    from pptx import Presentation

    prs = Presentation()
    for slide_text in slides:
        if slide_text is None:
            prs.slides.add_slide(prs.slide_layouts[6])
            continue
        title, body = slide_text
        slide = prs.slides.add_slide(prs.slide_layouts[1])
        slide.shapes.title.text = title
        slide.placeholders[1].text = body
    buf = io.BytesIO()
    prs.save(buf)
    return buf.getvalue()


SAMPLE_TEXT = (
    "Photosynthesis is the process used by plants to convert light energy into chemical energy. "
    "Plants capture sunlight with chlorophyll inside their leaves. "
    "The chemical energy is stored in glucose molecules. "
    "Oxygen is released into the atmosphere as a byproduct of photosynthesis. "
    "Without photosynthesis most life on Earth would not exist."
)
