"""Prompt templates for persona analysis and script generation."""

from __future__ import annotations

import json
from typing import Dict

from scriptdna.schemas import Persona, Platform, ScriptMode

ANALYSIS_SYSTEM_PROMPT = """
You are an expert Persona Analyst for a Video Script Writing System.
Your task is to analyze text samples and an image of a person to create a structured "Style Profile".

Analyze the input based on:
1. Text Features: Sentence structure preference, vocabulary habits (slang/technical), emotional pattern, opening/closing routines.
2. Visual Features (from image): Appearance description, suggested scene/setting, facial expression/posture.

Output the result in strict JSON format matching this schema:
{
  "languageFeatures": ["feature1", "feature2"],
  "visualFeatures": ["feature1", "feature2"],
  "platformAdvice": {"General": "advice"},
  "sampleSentences": ["example1", "example2"]
}
Only output the JSON.
"""

SCRIPT_SYSTEM_PROMPT = """
You are a Professional Cross-Platform Video Script AI Agent.
Your goal is to generate optimized video scripts based on a specific "Persona Style" and a target "Platform".

Core Capabilities:
1. Platform Adaptation (TikTok, YouTube, RedNote, etc.)
2. Persona Mimicry (Apply analyzed style traits)
3. Script Optimization (Hooks, CTAs, Structure)

Output Format (Markdown):
# Script for [Platform]
## 1. Style Match Analysis
- [How specific traits from the profile were used]
- [Specific phrases mimicking the persona]

## 2. Visual/Acting Suggestions
- [Outfit/Look based on persona visual features]
- [Scene/Background suggestions]
- [Acting cues]

## 3. The Script
(The actual script content, formatted for the platform. e.g., Scene headers, Dialogue, On-screen text)

## 4. Metadata
- **Titles:** (3 options)
- **Tags:** (Platform specific hashtags)
- **Risk Check:** (Potential shadowban keywords)
"""

TASK_VERBS: Dict[str, str] = {
    "rewrite": "Rewrite the provided text",
    "create": "Create a new script from topic",
}

SHORT_VIDEO_INSTRUCTIONS = "Fast pace, 3-second hook, trending BGM suggestions."

# One instruction fragment per platform
PLATFORM_INSTRUCTIONS: Dict[Platform, str] = {
    Platform.DOUYIN: SHORT_VIDEO_INSTRUCTIONS,
    Platform.KUAISHOU: SHORT_VIDEO_INSTRUCTIONS + " Down-to-earth tone, everyday relatability.",
    Platform.REDNOTE: "Use emojis, keywords, emotional resonance.",
    Platform.WECHAT_CHANNELS: "Warm, shareable tone suited to friends-and-family feeds; clear opening line.",
    Platform.WECHAT_OFFICIAL: "Article-style structure with headline, sub-headings and a closing call to action.",
    Platform.BILIBILI: "Cultural memes, longer form, community engagement.",
    Platform.YOUTUBE: "SEO keywords, clear structure.",
}


def build_analysis_prompt(name: str, text_sample: str) -> str:
    """Build the text part sent alongside the photo for persona analysis."""
    return f"""Analyze this person's style.
Name: {name}
Text Sample: "{text_sample}"

Extract their style profile according to the system instructions."""


def build_script_prompt(
    platform: Platform,
    persona: Persona,
    topic: str,
    mode: ScriptMode = "create",
) -> str:
    """
    Build the script generation prompt.

    The persona's trait lists are embedded verbatim as JSON so the model can
    imitate the voice.
    """
    analysis = persona.analysis
    language_traits = json.dumps(analysis.language_features, ensure_ascii=False)
    visual_traits = json.dumps(analysis.visual_features, ensure_ascii=False)
    sample_sentences = json.dumps(analysis.sample_sentences, ensure_ascii=False)

    return f"""TASK: {TASK_VERBS[mode]}
TARGET PLATFORM: {platform.value}
TOPIC/CONTENT: "{topic}"

PERSONA PROFILE TO MIMIC:
Name: {persona.name}
Language Traits: {language_traits}
Visual Traits: {visual_traits}
Sample Sentences: {sample_sentences}

Platform Instructions ({platform.value}):
- {PLATFORM_INSTRUCTIONS[platform]}

Please generate the full response following the standard output format."""
