"""Deterministic document generation from a free-text prompt.

Shared by the POST /api/generate route and the UI client fallback so both
render identical documents.
"""

import re
from dataclasses import dataclass
from string import Template

from backend.circuit_flow.generation import templates
from backend.circuit_flow.models.documents import GeneratedDocument

DEFAULT_PROJECT_NAME = "My Project"
MAX_NAME_WORDS = 3
MIN_WORD_LENGTH = 4

STOP_WORDS = frozenset(
    {"make", "build", "create", "want", "need", "like", "with", "that", "this", "have"}
)


@dataclass(frozen=True)
class DocumentTemplate:
    """Metadata plus body template for one generated document."""

    id: str
    title: str
    type: str
    description: str
    body: Template


# Order is part of the contract.
DOCUMENT_TEMPLATES: tuple[DocumentTemplate, ...] = (
    DocumentTemplate("prd", "PRD.md", "cpu", "Product Requirements Document", templates.PRD),
    DocumentTemplate("trd", "TRD.md", "memory", "Technical Requirements Document", templates.TRD),
    DocumentTemplate(
        "architecture", "Architecture.md", "gpu", "System Architecture", templates.ARCHITECTURE
    ),
    DocumentTemplate("api-spec", "API-Spec.md", "io", "API Specification", templates.API_SPEC),
    DocumentTemplate(
        "deployment", "Deployment.md", "storage", "Deployment Guide", templates.DEPLOYMENT
    ),
)


def extract_project_name(prompt: str) -> str:
    """Derive a short project name from the prompt.

    Keeps words longer than three characters that are not stop-words and
    joins the first three survivors.

    Args:
        prompt: Free-text user prompt

    Returns:
        Project name, or DEFAULT_PROJECT_NAME if no word survives
    """
    key_words = [
        word
        for word in prompt.split()
        if len(word) >= MIN_WORD_LENGTH and word.lower() not in STOP_WORDS
    ]
    return " ".join(key_words[:MAX_NAME_WORDS]) or DEFAULT_PROJECT_NAME


def slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def render_document(template: DocumentTemplate, project_name: str, prompt: str) -> GeneratedDocument:
    """Render one template into a document."""
    content = template.body.substitute(
        name=project_name,
        name_lower=project_name.lower(),
        slug=slugify(project_name),
        prompt=prompt,
        prompt_lower=prompt.lower(),
    )
    return GeneratedDocument(
        id=template.id,
        title=template.title,
        type=template.type,
        description=template.description,
        content=content,
    )


def generate_documents(prompt: str) -> list[GeneratedDocument]:
    """Render the five-document set for a prompt.

    Pure and deterministic: the same prompt always yields the same documents,
    in the order PRD, TRD, Architecture, API-Spec, Deployment.
    """
    project_name = extract_project_name(prompt)
    return [render_document(t, project_name, prompt) for t in DOCUMENT_TEMPLATES]
