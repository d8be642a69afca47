"""
Mock Data Generator
===================

Purpose:
--------
Turns a natural-language scenario and a row count into a tabular dataset
by prompting an LLM (Gemini via LangChain).

Public Interface:
-----------------
    def generate_mock_data(scenario: str, row_count: int) -> tuple[list[dict], list[str]]
    def parse_generation_output(raw_output: str) -> tuple[list[dict], list[str]]

Output Contract:
----------------
The model must answer with a single JSON object:
{
  "fields": ["field1", "field2", ...],
  "data": [{"field1": ..., "field2": ...}, ...]
}

The rows are returned as-is. They are not reconciled against `fields` and
the row count is not enforced; the model is asked for `row_count` rows.
"""

import json
import logging
import math
from pathlib import Path

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.prompts import PromptTemplate
from langchain_core.output_parsers import StrOutputParser

from src.app import config as app_config


logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class GenerationError(Exception):
    """Base exception for mock data generation failures."""
    pass


class LLMUnavailableError(GenerationError):
    """Raised when the LLM (Gemini) cannot be configured or called."""
    pass


class GenerationOutputError(GenerationError):
    """Raised when the LLM output is not a usable dataset."""
    pass


# =============================================================================
# LANGCHAIN CONFIGURATION
# =============================================================================

def _get_llm() -> ChatGoogleGenerativeAI:
    """
    Initialize the Gemini LLM via LangChain.

    Raises:
        LLMUnavailableError: If GEMINI_API_KEY is not set or initialization fails.
    """
    api_key = app_config.get_api_key()
    if not api_key:
        raise LLMUnavailableError(
            "GEMINI_API_KEY environment variable is not set. "
            "Set it before generating mock data."
        )

    try:
        return ChatGoogleGenerativeAI(
            model=app_config.MODEL_NAME,
            google_api_key=api_key,
            temperature=app_config.TEMPERATURE,
            max_output_tokens=app_config.MAX_OUTPUT_TOKENS,
        )
    except Exception as e:
        raise LLMUnavailableError(f"Failed to initialize Gemini LLM: {e}") from e


# =============================================================================
# PROMPT TEMPLATES (EXTERNALIZED)
# =============================================================================

_PROMPTS_FILE = Path(__file__).parent / "prompts_mock_data.json"


def _load_prompts() -> dict[str, str]:
    """Load prompt templates from external JSON file."""
    if not _PROMPTS_FILE.exists():
        raise FileNotFoundError(
            f"Prompts file not found: {_PROMPTS_FILE}. "
            "Ensure prompts_mock_data.json exists in the generation directory."
        )
    with open(_PROMPTS_FILE, "r", encoding="utf-8") as f:
        return json.load(f)


def _get_prompt(key: str) -> PromptTemplate:
    """Get a prompt template by key from the external JSON file."""
    prompts = _load_prompts()
    if key not in prompts:
        raise KeyError(f"Prompt key '{key}' not found in {_PROMPTS_FILE}")
    return PromptTemplate.from_template(prompts[key])


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def generate_mock_data(scenario: str, row_count: int) -> tuple[list[dict], list[str]]:
    """
    Ask the LLM for `row_count` rows matching `scenario`.

    Args:
        scenario: Natural-language description of the data.
        row_count: Number of rows to request.

    Returns:
        (rows, fields) parsed from the model output.

    Raises:
        LLMUnavailableError: If Gemini is not available or the call fails.
        GenerationOutputError: If the answer is not a valid dataset.
    """
    if not scenario or not scenario.strip():
        raise GenerationOutputError("Empty scenario provided to mock data generator.")

    logger.info("Requesting mock data for scenario: %s (%d rows)", scenario, row_count)

    llm = _get_llm()
    prompt = _get_prompt("mock_data_generation")
    chain = prompt | llm | StrOutputParser()

    try:
        raw_output = chain.invoke({"scenario": scenario, "row_count": row_count})
    except Exception as e:
        raise LLMUnavailableError(f"LLM call failed during mock data generation: {e}") from e

    rows, fields = parse_generation_output(raw_output)
    logger.info("Generated %d rows with %d fields", len(rows), len(fields))
    return rows, fields


def parse_generation_output(raw_output: str) -> tuple[list[dict], list[str]]:
    """
    Parse the model answer into (rows, fields).

    Markdown code fences around the JSON are tolerated.

    Raises:
        GenerationOutputError: On invalid JSON, NaN or infinite numbers, or
            missing/empty `fields` or `data`.
    """
    cleaned = _strip_code_fences(raw_output)

    try:
        result = json.loads(
            cleaned,
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
        )
    except json.JSONDecodeError as e:
        raise GenerationOutputError(
            f"Failed to parse LLM response as JSON: {e}. Raw output: {raw_output[:500]}"
        ) from e

    if not isinstance(result, dict):
        raise GenerationOutputError("LLM response must be a JSON object with 'fields' and 'data'.")

    fields = result.get("fields")
    data = result.get("data")

    if not isinstance(fields, list) or not fields:
        raise GenerationOutputError("LLM response missing fields")
    if not all(isinstance(name, str) for name in fields):
        raise GenerationOutputError("LLM response 'fields' must be a list of strings")

    if not isinstance(data, list) or not data:
        raise GenerationOutputError("LLM response missing data")
    if not all(isinstance(row, dict) for row in data):
        raise GenerationOutputError("LLM response 'data' must be a list of objects")

    return data, fields


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _reject_constant(name: str):
    """Refuse the NaN, Infinity and -Infinity literals json accepts by default."""
    raise GenerationOutputError(f"LLM response contains non-finite number {name}")


def _parse_finite_float(text: str) -> float:
    """Parse a JSON float, refusing values that overflow to infinity."""
    number = float(text)
    if not math.isfinite(number):
        raise GenerationOutputError(f"LLM response contains out-of-range number {text}")
    return number


def _strip_code_fences(raw_output: str) -> str:
    """Remove ```json ... ``` wrappers the model may add."""
    cleaned = raw_output.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()
