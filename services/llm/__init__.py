"""
LLM integration module for the planner API.

This module provides the OpenAI-backed completion client and the
prompt builders for plans, history advice, day adjustment and chat.
"""

from services.llm.client import OpenAICompletionClient
from services.llm.prompts import (
    build_adjustment_prompt,
    build_chat_prompt,
    build_history_prompt,
    build_plan_prompt,
    plan_dates,
    training_day_offsets,
)

__all__ = [
    "OpenAICompletionClient",
    "build_adjustment_prompt",
    "build_chat_prompt",
    "build_history_prompt",
    "build_plan_prompt",
    "plan_dates",
    "training_day_offsets",
]
