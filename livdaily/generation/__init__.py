# -*- coding: utf-8 -*-
"""Content generation: prompt building, structured model calls and persistence."""

from .prompts import PromptPair, build_prompt
from .llm_client import StructuredGenerator, get_generator

__all__ = ["PromptPair", "build_prompt", "StructuredGenerator", "get_generator"]
