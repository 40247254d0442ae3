import io
import json
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from docx import Document
from httpx import ASGITransport, AsyncClient

from resume_studio.api.deps import get_llm_client, get_workspace_store
from resume_studio.core.config import DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE
from resume_studio.main import create_app
from resume_studio.schemas.document import ResumeDocument
from resume_studio.storage.memory import InMemoryWorkspaceStore

# Smallest thing Gemini will accept as "a PDF"; it is never actually read.
FAKE_PDF = b"%PDF-1.4\n1 0 obj<</Type/Catalog>>endobj\ntrailer<</Root 1 0 R>>\n%%EOF"


def make_resume_data(**overrides) -> dict:
    """Helper to create a complete camelCase resume payload."""
    data = {
        "contactInfo": {
            "name": "Jane Doe",
            "email": "jane.doe@example.com",
            "phone": "555-123-4567",
            "linkedin": "https://linkedin.com/in/janedoe",
            "portfolio": "https://janedoe.dev",
            "location": "San Francisco, CA",
        },
        "summary": "A highly motivated software engineer who builds scalable web applications",
        "qualifications": [
            "Expert in modern frontend frameworks (React, Vue)",
            "Experienced with cloud platforms like AWS and Google Cloud",
        ],
        "workExperience": [
            {
                "jobTitle": "Senior Frontend Engineer",
                "company": "Tech Solutions Inc",
                "location": "Palo Alto, CA",
                "startDate": "Jan 2022",
                "endDate": "Present",
                "description": [
                    "Led the development of a customer-facing dashboard",
                    "Mentored junior engineers and ran code reviews",
                ],
            },
            {
                "jobTitle": "Software Engineer",
                "company": "Innovate Co",
                "location": "San Jose, CA",
                "startDate": "Jun 2019",
                "endDate": "Dec 2021",
                "description": ["Maintained a large-scale e-commerce platform"],
            },
        ],
        "education": [
            {
                "degree": "Bachelor of Science in Computer Science",
                "institution": "State University",
                "location": "San Francisco, CA",
                "graduationDate": "May 2019",
            }
        ],
        "skills": ["TypeScript", "React", "Node.js", "PostgreSQL"],
        "portfolioProjects": [
            {
                "projectName": "Personal Portfolio Website",
                "description": "A responsive portfolio built with Next.js",
                "technologies": ["Next.js", "React", "Tailwind CSS"],
                "link": "https://janedoe.dev",
            }
        ],
    }
    data.update(overrides)
    return data


def make_document(**overrides) -> ResumeDocument:
    return ResumeDocument.model_validate(make_resume_data(**overrides))


def make_gemini_response(text: str | None) -> MagicMock:
    """Create a mock Gemini generate_content response carrying raw text."""
    response = MagicMock()
    response.text = text
    return response


def make_docx_bytes(*paragraphs: str) -> bytes:
    doc = Document()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def resume_document() -> ResumeDocument:
    return make_document()


@pytest.fixture
def mock_gemini_client() -> MagicMock:
    """Return a mocked google.genai.Client answering with the sample resume."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=make_gemini_response(json.dumps(make_resume_data()))
    )
    return client


@pytest.fixture
def workspace_store() -> InMemoryWorkspaceStore:
    return InMemoryWorkspaceStore()


@pytest.fixture
async def client(mock_gemini_client, workspace_store) -> AsyncGenerator[AsyncClient]:
    app = create_app()
    app.dependency_overrides[get_llm_client] = lambda: mock_gemini_client
    app.dependency_overrides[get_workspace_store] = lambda: workspace_store

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", follow_redirects=True
    ) as ac:
        yield ac


@pytest.fixture
def pdf_upload() -> dict:
    return {"file": ("cv.pdf", FAKE_PDF, PDF_MEDIA_TYPE)}


@pytest.fixture
def docx_upload() -> dict:
    content = make_docx_bytes("JANE DOE", "Senior Frontend Engineer at Tech Solutions")
    return {"file": ("cv.docx", content, DOCX_MEDIA_TYPE)}
