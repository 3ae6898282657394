"""
Stoic Quotes API package.

Provides:
- FastAPI service proxying stoic quote generation to a DeepSeek-compatible chat API
- Prompt building, tier gating and sequential batch generation
- A one-shot CLI for generating a single quote
"""

__version__ = "2.0.0"
