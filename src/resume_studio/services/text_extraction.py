import asyncio
import io
import logging

from docx import Document

from resume_studio.core.exceptions import TransportError

logger = logging.getLogger(__name__)


def extract_text_from_docx(content: bytes) -> str:
    """Flatten a Word document into plain text, one paragraph per block."""
    try:
        doc = Document(io.BytesIO(content))
    except Exception as e:
        logger.warning("DOCX extraction failed: %s", e)
        raise TransportError("The uploaded Word document could not be read.") from e

    blocks = [para.text for para in doc.paragraphs if para.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                blocks.append(" | ".join(cells))
    return "\n\n".join(blocks)


async def extract_text_from_docx_async(content: bytes) -> str:
    return await asyncio.to_thread(extract_text_from_docx, content)
