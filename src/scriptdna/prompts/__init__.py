"""Prompt templates for ScriptDNA."""

from scriptdna.prompts.templates import (
    ANALYSIS_SYSTEM_PROMPT,
    PLATFORM_INSTRUCTIONS,
    SCRIPT_SYSTEM_PROMPT,
    TASK_VERBS,
    build_analysis_prompt,
    build_script_prompt,
)

__all__ = [
    "build_analysis_prompt",
    "build_script_prompt",
    "ANALYSIS_SYSTEM_PROMPT",
    "SCRIPT_SYSTEM_PROMPT",
    "PLATFORM_INSTRUCTIONS",
    "TASK_VERBS",
]
