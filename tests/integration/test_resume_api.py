"""Integration tests for the resumes HTTP API.

These tests exercise the /api/v1/resumes endpoints through an HTTPX
AsyncClient wired to the FastAPI app with a mocked Gemini client and an
in-memory workspace store.
"""

import json
import uuid
from unittest.mock import AsyncMock

import pytest

from resume_studio.core.config import DOCX_MEDIA_TYPE
from tests.conftest import make_gemini_response, make_resume_data

pytestmark = pytest.mark.integration

API = "/api/v1/resumes/"


# ── helpers ──────────────────────────────────────────────────────────────


async def _create_resume(client, files, **form):
    resp = await client.post(API, files=files, data={k: str(v) for k, v in form.items()})
    assert resp.status_code == 201, resp.text
    return resp.json()


# ── tests ────────────────────────────────────────────────────────────────


async def test_status(client):
    resp = await client.get("/api/v1/status")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_create_resume_from_pdf_201(client, pdf_upload, mock_gemini_client):
    """POST /resumes generates, sanitizes and stores the resume."""
    body = await _create_resume(client, pdf_upload, page_count=2)

    assert body["original_filename"] == "cv.pdf"
    assert body["media_type"] == "application/pdf"
    assert body["page_count"] == 2
    assert body["session_state"] == "idle"
    assert body["document"]["contactInfo"]["name"] == "Jane Doe"
    assert len(body["document"]["workExperience"]) == 2
    mock_gemini_client.aio.models.generate_content.assert_awaited_once()


async def test_create_resume_from_docx_201(client, docx_upload):
    body = await _create_resume(client, docx_upload)
    assert body["page_count"] == 1
    assert body["media_type"].endswith("wordprocessingml.document")


async def test_create_resume_drops_malformed_items(client, pdf_upload, mock_gemini_client):
    data = make_resume_data(
        workExperience=[
            {"jobTitle": "Eng", "company": "X", "description": ["did stuff"]},
            "stray string",
            {"jobTitle": "Bad"},
        ]
    )
    mock_gemini_client.aio.models.generate_content = AsyncMock(
        return_value=make_gemini_response(f"Here you go:\n```json\n{json.dumps(data)}\n```")
    )

    body = await _create_resume(client, pdf_upload)
    assert body["document"]["workExperience"] == [
        {
            "jobTitle": "Eng",
            "company": "X",
            "location": "",
            "startDate": "",
            "endDate": "",
            "description": ["did stuff"],
        }
    ]


async def test_create_resume_unsupported_type_415(client, mock_gemini_client):
    files = {"file": ("cv.txt", b"plain text cv", "text/plain")}
    resp = await client.post(API, files=files)

    assert resp.status_code == 415
    assert resp.json()["detail"] == "Invalid file type. Please upload a PDF or DOCX file."
    mock_gemini_client.aio.models.generate_content.assert_not_called()


async def test_create_resume_unreadable_docx_502(client, mock_gemini_client):
    files = {"file": ("cv.docx", b"not a zip archive", DOCX_MEDIA_TYPE)}
    resp = await client.post(API, files=files)

    assert resp.status_code == 502
    assert resp.json()["detail"] == "The uploaded Word document could not be read."
    mock_gemini_client.aio.models.generate_content.assert_not_called()


@pytest.mark.parametrize("page_count", [0, 4])
async def test_create_resume_bad_page_count_422(client, pdf_upload, page_count):
    resp = await client.post(API, files=pdf_upload, data={"page_count": str(page_count)})
    assert resp.status_code == 422


async def test_create_resume_empty_file_422(client):
    files = {"file": ("cv.pdf", b"", "application/pdf")}
    resp = await client.post(API, files=files)
    assert resp.status_code == 422


async def test_create_resume_no_json_502(client, pdf_upload, mock_gemini_client):
    mock_gemini_client.aio.models.generate_content = AsyncMock(
        return_value=make_gemini_response("I could not read that document.")
    )
    resp = await client.post(API, files=pdf_upload)

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Invalid response format from AI."


async def test_create_resume_truncated_json_502(client, pdf_upload, mock_gemini_client):
    mock_gemini_client.aio.models.generate_content = AsyncMock(
        return_value=make_gemini_response('{"summary": "truncated')
    )
    resp = await client.post(API, files=pdf_upload)

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Invalid response format from AI."


async def test_create_resume_unparseable_json_502(client, pdf_upload, mock_gemini_client):
    mock_gemini_client.aio.models.generate_content = AsyncMock(
        return_value=make_gemini_response('{"summary": "x",,}')
    )
    resp = await client.post(API, files=pdf_upload)

    assert resp.status_code == 502
    assert resp.json()["detail"] == "AI response malformed."


async def test_create_resume_transport_error_502(
    client, pdf_upload, mock_gemini_client, workspace_store
):
    mock_gemini_client.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("quota"))
    resp = await client.post(API, files=pdf_upload)

    assert resp.status_code == 502
    assert "Failed to generate resume from AI" in resp.json()["detail"]
    assert len(workspace_store) == 0


async def test_get_resume_200(client, pdf_upload):
    created = await _create_resume(client, pdf_upload)
    resp = await client.get(f"{API}{created['id']}")

    assert resp.status_code == 200
    assert resp.json()["document"] == created["document"]


async def test_get_resume_not_found_404(client):
    resp = await client.get(f"{API}{uuid.uuid4()}")
    assert resp.status_code == 404


async def test_render_resume_200(client, pdf_upload):
    created = await _create_resume(client, pdf_upload)
    resp = await client.get(f"{API}{created['id']}/render")

    assert resp.status_code == 200
    body = resp.json()
    assert body["contact"]["name"] == "Jane Doe"
    assert body["skills_line"] == "TypeScript • React • Node.js • PostgreSQL"
    assert body["work_experience"][0]["dates"] == "Jan 2022 – Present"


async def test_export_resume_200(client, pdf_upload):
    created = await _create_resume(client, pdf_upload)
    resp = await client.get(f"{API}{created['id']}/export")

    assert resp.status_code == 200
    assert resp.json()["filename"] == "Jane_Doe_Resume.pdf"


async def test_delete_resume_204(client, pdf_upload):
    created = await _create_resume(client, pdf_upload)

    resp = await client.delete(f"{API}{created['id']}")
    assert resp.status_code == 204

    resp = await client.get(f"{API}{created['id']}")
    assert resp.status_code == 404
