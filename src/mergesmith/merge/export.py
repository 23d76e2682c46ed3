"""Plain-text export of generated documents."""

import re
from typing import Iterable, Pattern

from .models import ResolvedDocument

# "=== Email 1 ===" on a line of its own starts a section
SECTION_HEADER_PATTERN: Pattern = re.compile(r"^=== (.*) ===\n", re.MULTILINE)

SECTION_SEPARATOR = "\n\n"


def format_section(document: ResolvedDocument) -> str:
    """Render one document as a header line, its content and a blank line."""
    return f"=== {document.name} ===\n{document.content}{SECTION_SEPARATOR}"


def export_documents(documents: Iterable[ResolvedDocument]) -> str:
    """
    Serialize documents into a single text blob.

    Args:
        documents: Documents in output order

    Returns:
        The concatenated sections, empty for no documents
    """
    return "".join(format_section(document) for document in documents)


def parse_export(text: str) -> list[ResolvedDocument]:
    """
    Split an exported blob back into documents.

    Content that itself contains a line shaped like a section header will be
    split at that line.

    Args:
        text: Output of export_documents

    Returns:
        Documents in blob order, ids reassigned from 0
    """
    headers = list(SECTION_HEADER_PATTERN.finditer(text))
    documents = []

    for index, header in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(text)
        content = text[header.end():end]
        if content.endswith(SECTION_SEPARATOR):
            content = content[: -len(SECTION_SEPARATOR)]
        documents.append(ResolvedDocument(id=index, name=header.group(1), content=content))

    return documents
