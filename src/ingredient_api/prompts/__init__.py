"""Prompt templates for upstream vision models."""

from .recognition import SUPPORTED_LANGUAGES, get_prompt, normalize_language

__all__ = ["SUPPORTED_LANGUAGES", "get_prompt", "normalize_language"]
