"""
LLM Provider Interface - Abstract base for AI service providers.

This module defines the interface for LLM services (OpenAI, Ollama, Anthropic, etc.).
"""
from abc import ABC, abstractmethod
from typing import Dict, Any


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers (OpenAI, Ollama, Anthropic, etc.).
    """

    @abstractmethod
    def review_assessment(self, content: str, role_type: str) -> Dict[str, Any]:
        """
        Produce an advisory review of a writing assessment.

        Returns a dictionary with keys:
        - summary: overall impression
        - strengths / weaknesses: short lists of observations
        - role_fit: strong | moderate | weak
        - suspected_ai_generated: bool

        Implementations raise on failure; callers decide whether that is fatal.
        """
        pass
