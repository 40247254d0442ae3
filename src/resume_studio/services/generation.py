import logging

from google import genai
from google.genai import types

from resume_studio.core.config import DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE
from resume_studio.core.exceptions import TransportError, UnsupportedMediaTypeError
from resume_studio.schemas.document import ResumeDocument
from resume_studio.services.resume_parser import parse_document
from resume_studio.services.text_extraction import extract_text_from_docx_async

logger = logging.getLogger(__name__)

SUPPORTED_MEDIA_TYPES = (PDF_MEDIA_TYPE, DOCX_MEDIA_TYPE)

GENERATION_PROMPT = (
    "You are an expert resume writer. Analyze the provided CV document. "
    "Extract all relevant information, including contact details, professional "
    "summary, key qualifications, work experience, education, skills and "
    "portfolio projects. Then, rewrite and format this information into a "
    "concise, professional, US-style resume. The final resume must not exceed "
    "{page_count} page(s) in length when printed. Paraphrase and summarize "
    "content as needed to meet this length requirement, focusing on impact and "
    "achievements. Leave out qualifications or portfolio projects entirely if "
    "the CV has none. Return the output as a JSON object matching the provided "
    "schema."
)

_STRING = {"type": types.Type.STRING}
_STRING_LIST = {"type": types.Type.ARRAY, "items": _STRING}

RESUME_RESPONSE_SCHEMA = {
    "type": types.Type.OBJECT,
    "properties": {
        "contactInfo": {
            "type": types.Type.OBJECT,
            "properties": {
                "name": {**_STRING, "description": "Full name"},
                "email": {**_STRING, "description": "Email address"},
                "phone": {**_STRING, "description": "Phone number"},
                "linkedin": {**_STRING, "description": "LinkedIn profile URL (optional)"},
                "portfolio": {
                    **_STRING,
                    "description": "Portfolio or personal website URL (optional)",
                },
                "location": {
                    **_STRING,
                    "description": "City and State, e.g., 'San Francisco, CA'",
                },
            },
            "required": ["name", "email", "phone", "location"],
        },
        "summary": {**_STRING, "description": "A 2-4 sentence professional summary."},
        "qualifications": {
            **_STRING_LIST,
            "description": "Key qualifications as short bullet points (optional).",
        },
        "workExperience": {
            "type": types.Type.ARRAY,
            "items": {
                "type": types.Type.OBJECT,
                "properties": {
                    "jobTitle": _STRING,
                    "company": _STRING,
                    "location": _STRING,
                    "startDate": {**_STRING, "description": "e.g., 'June 2020'"},
                    "endDate": {**_STRING, "description": "e.g., 'Present' or 'August 2022'"},
                    "description": {
                        **_STRING_LIST,
                        "description": "Accomplishments and responsibilities as bullet points.",
                    },
                },
                "required": [
                    "jobTitle",
                    "company",
                    "location",
                    "startDate",
                    "endDate",
                    "description",
                ],
            },
        },
        "education": {
            "type": types.Type.ARRAY,
            "items": {
                "type": types.Type.OBJECT,
                "properties": {
                    "degree": {
                        **_STRING,
                        "description": "e.g., 'Bachelor of Science in Computer Science'",
                    },
                    "institution": _STRING,
                    "location": _STRING,
                    "graduationDate": {**_STRING, "description": "e.g., 'May 2020'"},
                },
                "required": ["degree", "institution", "location", "graduationDate"],
            },
        },
        "skills": {
            **_STRING_LIST,
            "description": "A list of relevant technical and soft skills.",
        },
        "portfolioProjects": {
            "type": types.Type.ARRAY,
            "items": {
                "type": types.Type.OBJECT,
                "properties": {
                    "projectName": _STRING,
                    "description": _STRING,
                    "technologies": _STRING_LIST,
                    "link": {**_STRING, "description": "Project URL (optional)"},
                },
                "required": ["projectName", "description", "technologies"],
            },
        },
    },
    "required": ["contactInfo", "summary", "workExperience", "education", "skills"],
}


def validate_media_type(mime_type: str) -> str:
    """Return the canonical media type, rejecting anything but PDF and DOCX."""
    base = (mime_type or "").split(";")[0].strip().lower()
    if base not in SUPPORTED_MEDIA_TYPES:
        raise UnsupportedMediaTypeError(f"Unsupported media type: {mime_type or 'unknown'}")
    return base


def build_prompt(page_count: int) -> str:
    return GENERATION_PROMPT.format(page_count=page_count)


async def _document_part(content: bytes, mime_type: str) -> types.Part:
    if mime_type == DOCX_MEDIA_TYPE:
        text = await extract_text_from_docx_async(content)
        if not text.strip():
            raise TransportError("The Word document contains no readable text")
        return types.Part.from_text(text=text)
    return types.Part.from_bytes(data=content, mime_type=mime_type)


async def request_resume_text(
    client: genai.Client,
    content: bytes,
    mime_type: str,
    page_count: int,
    model: str,
    temperature: float | None = None,
) -> str:
    """Ask Gemini to rewrite the CV and return its raw text response."""
    mime_type = validate_media_type(mime_type)
    if not content:
        raise TransportError("CV file content is empty.")

    document = await _document_part(content, mime_type)
    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=[
                types.Content(
                    role="user",
                    parts=[types.Part.from_text(text=build_prompt(page_count)), document],
                )
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESUME_RESPONSE_SCHEMA,
                temperature=temperature,
            ),
        )
    except Exception as e:
        logger.error("Gemini generation request failed: %s", e)
        raise TransportError() from e

    raw = response.text
    if not raw:
        raise TransportError("The AI returned an empty response.")
    return raw


async def generate_resume(
    client: genai.Client,
    content: bytes,
    mime_type: str,
    page_count: int,
    model: str,
    temperature: float | None = None,
) -> ResumeDocument:
    """Generate a resume from an uploaded CV: request, extract, sanitize."""
    raw = await request_resume_text(client, content, mime_type, page_count, model, temperature)
    return parse_document(raw)
