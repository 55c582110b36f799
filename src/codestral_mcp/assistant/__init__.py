"""Code task assistant module."""

from codestral_mcp.assistant.extract import extract_code, format_completion
from codestral_mcp.assistant.prompts import SYSTEM_PROMPTS, build_prompt
from codestral_mcp.assistant.schemas import CODE_COMPLETION_TOOL, CODE_COMPLETION_TOOL_NAME
from codestral_mcp.assistant.service import CodeAssistant, CodeTaskInput, ToolResult

__all__ = [
    "CODE_COMPLETION_TOOL",
    "CODE_COMPLETION_TOOL_NAME",
    "CodeAssistant",
    "CodeTaskInput",
    "SYSTEM_PROMPTS",
    "ToolResult",
    "build_prompt",
    "extract_code",
    "format_completion",
]
