"""LLM adapters and response cleanup helpers for TodoAI."""
