"""Saved snippet record and document helpers."""

from .model import Snippet, snippet_document

__all__ = ["Snippet", "snippet_document"]
