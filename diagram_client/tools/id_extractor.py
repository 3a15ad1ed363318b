"""Pull server-assigned identifiers out of tool result text.

The service reports new ids inside prose such as
``"Created diagram with ID: 3f2a..."`` rather than in a structured field.
All knowledge of that convention lives here.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Optional


class IdPattern(str, Enum):
    DIAGRAM = "diagram"
    ENTITY = "entity"


_ID_PATTERNS: dict[IdPattern, re.Pattern[str]] = {
    IdPattern.DIAGRAM: re.compile(r"(?:diagram ID|with ID): ([A-Fa-f0-9\-]+)"),
    IdPattern.ENTITY: re.compile(r"ID: ([A-Fa-f0-9\-]+)"),
}


def extract_identifier(text: str, pattern: IdPattern | str) -> Optional[str]:
    """Return the first id matching ``pattern`` in ``text``, or ``None``."""
    match = _ID_PATTERNS[IdPattern(pattern)].search(text or "")
    if not match:
        return None
    return match.group(1)


def extract_diagram_id(text: str) -> Optional[str]:
    return extract_identifier(text, IdPattern.DIAGRAM)


def extract_node_id(text: str) -> Optional[str]:
    return extract_identifier(text, IdPattern.ENTITY)
