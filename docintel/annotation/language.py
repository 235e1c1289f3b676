"""Stop-word based language guess, independent of the AI provider."""

FALLBACK_LANGUAGE = "en"
ALTERNATE_LANGUAGE = "pl"

ENGLISH_STOP_WORDS = frozenset(
    {"the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by"}
)
POLISH_STOP_WORDS = frozenset(
    {"i", "oraz", "lub", "ale", "w", "na", "do", "dla", "z", "przez", "od"}
)


def detect_language(text: str) -> str:
    """Return ``pl`` only when Polish stop-words strictly outnumber English ones."""
    words = text.lower().split()
    english_count = sum(1 for word in words if word in ENGLISH_STOP_WORDS)
    polish_count = sum(1 for word in words if word in POLISH_STOP_WORDS)
    if polish_count > english_count:
        return ALTERNATE_LANGUAGE
    return FALLBACK_LANGUAGE
