# =============================================================================
# agents/ - AI Agent Definitions
# =============================================================================
# This package contains the OpenAI-backed stylist:
# - stylist.py: Report (vision chat completion) and style image (image edit)
#
# Prompts:
# - prompts/stylist_system.py: Report system prompt, user message, image prompt
# =============================================================================

from agents.stylist import StylistAgent, StylistError

__all__ = [
    "StylistAgent",
    "StylistError",
]
