"""
Mini Perplexity backend.

Web-search-augmented chat service: searches the web, asks Gemini for an
answer and persists sessions, messages and their cited sources.
"""

__version__ = "0.1.0"
