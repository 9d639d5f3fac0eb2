"""Declarative source-key candidates for each canonical listing field.

Upstream sources name the same field differently (Spanish feed keys, English
JSON keys, Atom element names). Each canonical field lists the source keys to
try, in priority order; the first present, non-empty value wins.
"""

import re
from typing import Dict, Pattern, Tuple

FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "title": ("titulo", "title"),
    "organization_name": ("organo", "organismo", "organization", "organizationName"),
    "procedure_type": ("procedimiento", "tipo", "procedureType"),
    "status": ("estado", "state", "status"),
    "amount": ("presupuesto", "importe", "precio", "amount"),
    "publication_date": (
        "fecha",
        "publicacion",
        "date",
        "updated",
        "published",
        "publicationDate",
    ),
    "deadline_date": ("fecha_limite", "limitDate", "deadline", "deadlineDate"),
    "url": ("enlace", "link", "url"),
}

# Free-text blobs that only contribute to searchable_text
SUMMARY_CANDIDATES: Tuple[str, ...] = ("summary", "content", "description", "resumen")

# Keys used by XML-to-dict conversions for an element's text node
TEXT_NODE_KEYS: Tuple[str, ...] = ("#text", "value", "href")

# Values end at a tag, a line break, or the "; " separating summary fields
_LABEL_VALUE = r"\s*([^<\n;]+)"

# Ordered; the first label found in the summary wins
ORGANIZATION_LABEL_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"[ÓO]rgano de Contrataci[óo]n:" + _LABEL_VALUE, re.IGNORECASE),
    re.compile(r"[ÓO]rgano de Contrataci[óo]n\s*-" + _LABEL_VALUE, re.IGNORECASE),
    re.compile(r"Organismo:" + _LABEL_VALUE, re.IGNORECASE),
    re.compile(r"Entidad adjudicadora:" + _LABEL_VALUE, re.IGNORECASE),
    re.compile(r"Contracting body:" + _LABEL_VALUE, re.IGNORECASE),
    re.compile(r"\bEntity:" + _LABEL_VALUE, re.IGNORECASE),
)
