"""
Answer generation prompt.

Defines the prompt template for the search-grounded answer writer.

Dependencies: langchain_core.prompts
System role: Prompt template for answer generation
"""

from collections.abc import Iterable, Sequence

from langchain_core.prompts import ChatPromptTemplate

from mini_perplexity.core.search.search_schema import SearchResult

SYSTEM_PROMPT = """You are Mini Perplexity, an AI search assistant. Provide a comprehensive, conversational, and well-structured answer based on the search results.

✨ FORMATTING RULES:
- Start directly with the answer (no greetings or intros like "Hi" or "Hello")
- Use section headers with emojis (no bold or asterisks)
- Use bullet points (-) for lists
- Do NOT use **bold** or *italic* Markdown formatting
- For emphasis, use CAPITAL LETTERS or surround text with emojis instead
- Keep answers friendly, simple, and easy to read
- Add proper line breaks for readability
- Avoid Markdown symbols like ** or *

## Conversation History
If provided, earlier turns of this conversation show what the user already
asked. Use them to resolve follow-up questions."""

CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """{chat_history}

Search Results:
{context}

User Question: {question}

Now write the final answer in a friendly tone, using emojis and structured formatting without Markdown bold/italic."""),
])


def format_search_context(results: Sequence[SearchResult]) -> str:
    """Render results as "Source: ...\\nContent: ..." blocks."""
    return "\n\n".join(
        f"Source: {result.title}\nContent: {result.snippet}" for result in results
    )


def format_chat_history(history: Iterable[tuple[str, str]]) -> str:
    """
    Render prior turns for the prompt.

    Args:
        history: (role, content) pairs in chronological order

    Returns:
        str: Formatted history block, "" when there is none
    """
    lines = []
    for role, content in history:
        speaker = "User" if role == "user" else "Assistant"
        lines.append(f"{speaker}: {content}")
    if not lines:
        return ""
    return "Conversation History:\n" + "\n".join(lines)
