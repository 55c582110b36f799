"""
prompts.py

PURPOSE: Prompt templates for code tasks.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
Each task kind gets its own expert-persona system prompt. The user message
wraps the code in a fenced block tagged with the language; fill-in-the-middle
adds a second fenced block with the code the result must end with.
"""

from codestral_mcp.llm.models import Message, Role, TaskKind

SYSTEM_PROMPTS: dict[TaskKind, str] = {
    TaskKind.COMPLETE: (
        "You are an expert programmer. Continue or complete the provided code "
        "according to best practices."
    ),
    TaskKind.FIX: (
        "You are an expert programmer. Analyze the code for bugs and provide a "
        "corrected version with explanations of the fixes."
    ),
    TaskKind.TEST: (
        "You are an expert programmer. Generate comprehensive unit tests for the "
        "provided code using appropriate testing frameworks."
    ),
    TaskKind.FIM: (
        "You are an expert programmer. Complete the code between the given start "
        "and end sections, ensuring it flows naturally."
    ),
}

FIM_SUFFIX_LEAD = "The code should end with:"


def fence(code: str, language: str | None = None) -> str:
    """Wrap code in a fenced block tagged with the language (untagged when None)."""
    return f"```{language or ''}\n{code}\n```"


def build_prompt(
    task: TaskKind,
    code: str,
    language: str | None = None,
    suffix: str | None = None,
) -> list[Message]:
    """
    Build the conversation for a code task.

    Args:
        task: Which task to prompt for.
        code: The code to process (passed through as-is, even if empty).
        language: Optional language name used as the fence tag.
        suffix: For FIM, the code the completion must end with.

    Returns:
        Exactly two messages: the system prompt, then the user content.
    """
    user_content = fence(code, language)

    if task == TaskKind.FIM and suffix:
        user_content += f"\n\n{FIM_SUFFIX_LEAD}\n\n{fence(suffix, language)}"

    return [
        Message(role=Role.SYSTEM, content=SYSTEM_PROMPTS[task]),
        Message(role=Role.USER, content=user_content),
    ]
