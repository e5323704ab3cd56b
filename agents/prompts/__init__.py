# =============================================================================
# agents/prompts/ - System Prompts for AI Agents
# =============================================================================
# This package contains prompts for the Stylist agent:
# - stylist_system.py: report system prompt, user message, style image prompt
# =============================================================================

from agents.prompts.stylist_system import (
    STYLE_IMAGE_CONFIG,
    build_analysis_prompt,
    build_style_prompt,
    build_user_message,
    gender_label,
)

__all__ = [
    "STYLE_IMAGE_CONFIG",
    "build_analysis_prompt",
    "build_style_prompt",
    "build_user_message",
    "gender_label",
]
