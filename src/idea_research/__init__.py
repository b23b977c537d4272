"""
Idea research assistant: web research and LLM summaries for startup ideas.
"""
__version__ = "0.1"
