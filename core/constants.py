"""
Shared constants.

This module has no dependencies on models or services to avoid circular imports.
"""

# Maximum length for a single free-text preference (limitations, equipment, ...)
MAX_PREFERENCE_LENGTH = 200

# Maximum length for a chat message forwarded to the model
MAX_CHAT_MESSAGE_LENGTH = 2000

# A planner always spans one week
PLAN_DAYS = 7

# Every advice list (nutrition, recommendations, goals, prediction) has 5 entries
ADVICE_ITEMS = 5

ADVICE_KEYS = ("nutrition", "recommendations", "goals", "prediction")

# Look-back windows for history based features
HISTORY_PREDICTION_DAYS = 14
ACTIVITY_SUMMARY_DAYS = 30
