"""URL slugs derived from titles and category names."""

import re
import unicodedata

# ASCII word characters only; any Unicode whitespace still separates words.
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9_\s-]")
_WHITESPACE_RUNS = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-+")


def slugify(text: str) -> str:
    """
    Deterministic, idempotent slug: "Olá, Mundo!" -> "ola-mundo".

    Lowercase, NFD-decompose, drop combining marks, drop anything outside
    word/space/hyphen, turn whitespace runs into one hyphen, collapse hyphens,
    trim leading/trailing hyphens.
    """
    value = unicodedata.normalize("NFD", text.lower())
    value = "".join(ch for ch in value if not unicodedata.combining(ch))
    value = _NON_SLUG_CHARS.sub("", value)
    value = _WHITESPACE_RUNS.sub("-", value.strip())
    value = _HYPHEN_RUNS.sub("-", value)
    return value.strip("-")
