"""Prompt templates for LLM-backed entity extraction and command validation."""

from __future__ import annotations

ENTITY_EXTRACTION_PROMPT = """\
Extract the listed parameters from the user's request.

User request: "{query}"

Parameters to extract:
{parameters}

Respond with a JSON object mapping each parameter name to its value, e.g.
{{"param_name": "value"}}
Leave out any parameter you cannot determine. Return only JSON, no explanation.
"""

ENTITY_DESCRIPTIONS: dict[str, str] = {
    "path": "file or directory path (e.g. ./src, doc, /tmp)",
    "file_type": "file extension (e.g. py, rs, js)",
    "number": "number (e.g. 100, 3.14)",
    "operation": "operation name (e.g. count, find)",
    "date": "date or time (e.g. 2025-10-14, today)",
}

COMMAND_VALIDATION_PROMPT = """\
Assess whether the generated shell command is a reasonable answer to the request.

User request: "{query}"
Generated command: {command}
Matched intent: {intent_name}
Template: {template_name}

Consider:
1. Does the command capture what the user asked for?
2. Are the parameters (paths, numbers, patterns) sensible?
3. Are there obvious mistakes or safety risks?

Respond only with a JSON object:
{{
  "is_valid": true,
  "confidence": 0.0,
  "reason": "short justification",
  "suggestions": ["improvement", "..."]
}}
confidence is a number between 0.0 and 1.0; suggestions may be an empty list.
"""
