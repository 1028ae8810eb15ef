"""
Session title derivation.

Dependencies: None
System role: Human-readable session labels
"""

ELLIPSIS = "..."


def derive_title(first_question: str, max_length: int = 50) -> str:
    """
    Label a session after the first question asked in it.

    Args:
        first_question: Content of the first user message
        max_length: Characters kept before the ellipsis

    Returns:
        str: The question, truncated to max_length plus "..." when longer
    """
    if len(first_question) > max_length:
        return first_question[:max_length] + ELLIPSIS
    return first_question
