"""
Document Rendering (reportlab)

``render_document(content)`` draws a titled table where every row may carry
a raster image in its first column. A missing or undecodable image is
replaced by a placeholder box, so one bad asset never fails an export.

``fetch_image`` downloads a remote image with a bounded timeout and
returns None on any failure.
"""

import io
import logging
from dataclasses import dataclass, field

import httpx
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

MARGIN = 40
IMAGE_SIZE = 60
ROW_HEIGHT = 70
COLUMN_GAP = 10
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


@dataclass
class DocumentRow:
    """One table row: optional image plus one text block per column."""

    image: bytes | None
    columns: list[str]


@dataclass
class DocumentContent:
    title: str
    subtitle: str = ""
    headers: list[str] = field(default_factory=list)
    rows: list[DocumentRow] = field(default_factory=list)
    # Label/value pairs printed after the table
    details: list[tuple[str, str]] = field(default_factory=list)
    column_ratios: list[float] = field(default_factory=lambda: [0.45, 0.55])


async def fetch_image(client: httpx.AsyncClient, url: str | None, timeout: float) -> bytes | None:
    """
    Download an image, returning None if the URL is empty or malformed,
    the request times out, or the server answers with an error.
    """
    if not url:
        return None

    try:
        response = await client.get(url, timeout=timeout)
        response.raise_for_status()
        return response.content
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Image fetch failed for {url}: {e}")
        return None


def _draw_placeholder(pdf: canvas.Canvas, x: float, y_top: float) -> None:
    pdf.setStrokeGray(0.8)
    pdf.rect(x, y_top - IMAGE_SIZE, IMAGE_SIZE, IMAGE_SIZE, stroke=1, fill=0)
    pdf.setFont(FONT, 8)
    pdf.setFillGray(0.4)
    pdf.drawString(x + 8, y_top - IMAGE_SIZE / 2 - 3, "No Image")
    pdf.setFillGray(0)


def _draw_image(pdf: canvas.Canvas, image: bytes | None, x: float, y_top: float) -> None:
    if image is None:
        _draw_placeholder(pdf, x, y_top)
        return

    try:
        reader = ImageReader(io.BytesIO(image))
        pdf.drawImage(
            reader,
            x,
            y_top - IMAGE_SIZE,
            width=IMAGE_SIZE,
            height=IMAGE_SIZE,
            preserveAspectRatio=True,
            anchor="c",
        )
    except Exception as e:
        logger.warning(f"Could not embed image in export: {e}")
        _draw_placeholder(pdf, x, y_top)


def _draw_text_block(
    pdf: canvas.Canvas, text: str, x: float, y_top: float, width: float, size: int = 10
) -> None:
    pdf.setFont(FONT, size)
    y = y_top - size
    for paragraph in text.split("\n"):
        for line in simpleSplit(paragraph, FONT, size, width) or [""]:
            pdf.drawString(x, y, line)
            y -= size + 2


def render_document(content: DocumentContent) -> bytes:
    """
    Render ``content`` to PDF bytes.

    Layout: centered title and subtitle, a header line, then one row per
    entry with the image column first. Pages break automatically.
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    page_width, page_height = A4
    usable_width = page_width - 2 * MARGIN

    text_left = MARGIN + IMAGE_SIZE + COLUMN_GAP
    text_width = usable_width - IMAGE_SIZE - COLUMN_GAP
    column_widths = [text_width * ratio for ratio in content.column_ratios]

    y = page_height - MARGIN

    pdf.setTitle(content.title)
    pdf.setFont(FONT_BOLD, 20)
    pdf.drawCentredString(page_width / 2, y - 20, content.title)
    y -= 32
    if content.subtitle:
        pdf.setFont(FONT, 10)
        pdf.drawCentredString(page_width / 2, y - 10, content.subtitle)
        y -= 24

    if content.headers:
        pdf.setFont(FONT_BOLD, 11)
        pdf.drawString(MARGIN, y - 11, "Photo")
        x = text_left
        for header, width in zip(content.headers, column_widths):
            pdf.drawString(x, y - 11, header)
            x += width
        y -= 18
        pdf.setStrokeGray(0.85)
        pdf.line(MARGIN, y, MARGIN + usable_width, y)
        y -= 6

    for row in content.rows:
        if y - ROW_HEIGHT < MARGIN:
            pdf.showPage()
            y = page_height - MARGIN

        _draw_image(pdf, row.image, MARGIN, y)

        x = text_left
        for text, width in zip(row.columns, column_widths):
            _draw_text_block(pdf, text, x, y, width - COLUMN_GAP)
            x += width

        y -= ROW_HEIGHT
        pdf.setStrokeGray(0.93)
        pdf.line(MARGIN, y + 5, MARGIN + usable_width, y + 5)

    if content.details:
        y -= 10
        for label, value in content.details:
            if y - 16 < MARGIN:
                pdf.showPage()
                y = page_height - MARGIN
            pdf.setFont(FONT_BOLD, 10)
            pdf.drawString(MARGIN, y - 10, f"{label}:")
            pdf.setFont(FONT, 10)
            pdf.drawString(MARGIN + 150, y - 10, value or "-")
            y -= 16

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
