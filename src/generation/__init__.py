"""
Generation Module
=================

LLM-backed mock data generation.
"""

from .mock_data_generator import (
    generate_mock_data,
    parse_generation_output,

    # Exceptions
    GenerationError,
    LLMUnavailableError,
    GenerationOutputError,
)

__all__ = [
    "generate_mock_data",
    "parse_generation_output",
    "GenerationError",
    "LLMUnavailableError",
    "GenerationOutputError",
]
