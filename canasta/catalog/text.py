import unicodedata


def fold(value: str) -> str:
    """Lower-case and strip accents so "Fríjol" and "FRIJOL" compare equal."""
    value = unicodedata.normalize("NFKD", value.casefold())
    return "".join(ch for ch in value if not unicodedata.combining(ch))


def search_document(*parts) -> str:
    """Folded text the listing search matches against, one part per line."""
    return "\n".join(fold(part) for part in parts if part)
