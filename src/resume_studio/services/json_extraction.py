import re

from resume_studio.core.exceptions import ExtractionError

_FENCED_BLOCK = re.compile(r"```[A-Za-z0-9_-]*[ \t]*\n?(.*?)```", re.DOTALL)


def _fenced_object(text: str) -> str | None:
    for match in _FENCED_BLOCK.finditer(text):
        content = match.group(1).strip()
        if content.startswith("{") and content.endswith("}"):
            return content
    return None


def _largest_brace_span(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def extract_json_span(text: str) -> str:
    """Return the substring of model output most likely to be one JSON object.

    A fenced code block holding an object wins; otherwise the span from the
    first ``{`` to the last ``}`` is used.
    """
    span = _fenced_object(text or "") or _largest_brace_span(text or "")
    if span is None:
        raise ExtractionError("No JSON object found in model output")
    return span
