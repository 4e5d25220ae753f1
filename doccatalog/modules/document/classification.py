"""Filename-based classification of reference documents."""

import secrets
import string
import time
from pathlib import PurePosixPath
from typing import Dict, List, Tuple

from .schemas import DocumentType

# Checked in order; the first matching keyword wins.
_TYPE_KEYWORDS: Tuple[Tuple[DocumentType, Tuple[str, ...]], ...] = (
    (DocumentType.TDS, ("tds", "technical data")),
    (DocumentType.ESR, ("esr", "evaluation report")),
    (DocumentType.MSDS, ("msds", "safety data")),
    (DocumentType.LEED, ("leed",)),
    (DocumentType.INSTALLATION, ("installation", "install")),
    (DocumentType.WARRANTY, ("warranty",)),
    (DocumentType.ACOUSTIC, ("acoustic", "esl")),
    (DocumentType.PART_SPEC, ("spec", "3-part")),
)

DISPLAY_NAMES: Dict[DocumentType, str] = {
    DocumentType.TDS: "Technical Data Sheet",
    DocumentType.ESR: "Evaluation Report",
    DocumentType.MSDS: "Material Safety Data Sheet",
    DocumentType.LEED: "LEED Credit Guide",
    DocumentType.INSTALLATION: "Installation Guide",
    DocumentType.WARRANTY: "Limited Warranty",
    DocumentType.ACOUSTIC: "Acoustical Performance",
    DocumentType.PART_SPEC: "3-Part Specifications",
}

STRUCTURAL_FLOOR = "structural-floor"
STRUCTURAL_FLOOR_VARIANTS = ("3/4-in (20mm)",)
DEFAULT_VARIANTS = ("1/2-in (13mm)", "5/8-in (16mm)")

_KEY_ALPHABET = string.ascii_lowercase + string.digits
_KEY_RANDOM_LENGTH = 9


def classify_document(filename: str) -> DocumentType:
    """Guess the document type from keywords in the filename, defaulting to TDS."""
    lower = filename.lower()

    for document_type, keywords in _TYPE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return document_type

    return DocumentType.TDS


def display_name(filename: str, document_type: DocumentType) -> str:
    """Canonical display name of a document.

    The label table covers every ``DocumentType``, so the filename never
    ends up in the name.
    """
    return DISPLAY_NAMES[document_type]


def size_variants_for(product_type: str) -> List[str]:
    """Size-variant labels a new document of ``product_type`` is tagged with."""
    if product_type == STRUCTURAL_FLOOR:
        return list(STRUCTURAL_FLOOR_VARIANTS)
    return list(DEFAULT_VARIANTS)


def build_storage_key(filename: str) -> str:
    """Unique blob key for one upload: ``{epoch_ms}-{random}-{filename}``.

    Directory components of the filename are dropped.
    """
    basename = PurePosixPath(filename.replace("\\", "/")).name or "document.pdf"
    suffix = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(_KEY_RANDOM_LENGTH))
    return f"{time.time_ns() // 1_000_000}-{suffix}-{basename}"
