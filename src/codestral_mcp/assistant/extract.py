"""
extract.py

PURPOSE: Pull code out of a model's free-text answer.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
Models usually answer with prose around one or more fenced blocks. When
fences are present only their contents are kept, in order, separated by a
blank line. Text without fences is returned untouched, so extraction is
idempotent on its own output.
"""

import re

from codestral_mcp.llm.errors import EmptyCompletionError
from codestral_mcp.llm.models import CompletionResponse

# Opening fence, optional tag and trailing blanks, LF or CRLF, then lazily to the close.
CODE_BLOCK_PATTERN = re.compile(r"```[\w+#.-]*[ \t]*\r?\n(.*?)```", re.DOTALL)


def extract_code(content: str) -> str:
    """
    Extract fenced code blocks from text.

    Args:
        content: Model answer text.

    Returns:
        Trimmed block contents joined by a blank line, or the content
        unchanged if it has no fenced blocks.
    """
    blocks = CODE_BLOCK_PATTERN.findall(content)
    if not blocks:
        return content
    return "\n\n".join(block.strip() for block in blocks)


def format_completion(completion: CompletionResponse) -> str:
    """
    Format a completion for presentation to the calling agent.

    Raises:
        EmptyCompletionError: If the completion has no choices.
    """
    content = completion.content
    if content is None:
        raise EmptyCompletionError()
    return extract_code(content)
