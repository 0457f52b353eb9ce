"""LLM access for vision-based food identification."""

from .llm import get_llm, get_llm_info

__all__ = ["get_llm", "get_llm_info"]
