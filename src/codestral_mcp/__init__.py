"""
Codestral MCP - Code-assistance tasks served by Mistral's Codestral models.

This package provides tools for:
- Building task prompts (complete, fix, test, fill-in-the-middle)
- Calling the Mistral completion endpoints with validation and pacing
- Extracting code from model answers for a calling agent
"""

__version__ = "0.1.0"
