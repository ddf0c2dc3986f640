from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def normalize_query(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def title_case(value: str) -> str:
    """Upper-case the first letter of each space-separated word, lower-case the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in value.split(" "))
