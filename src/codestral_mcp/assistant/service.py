"""
service.py

PURPOSE: Run code tasks end to end for a calling agent.
DEPENDENCIES: pydantic, completion client

ARCHITECTURE NOTES:
CodeAssistant ties the pieces together: prompt building, the completion
call and code extraction. run() and infill() raise domain errors;
handle() is the tool boundary and turns every failure into an error
ToolResult so nothing escapes to the protocol layer.
Includes OpenTelemetry tracing for observability.
"""

import logging
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ValidationError

from codestral_mcp.assistant.extract import format_completion
from codestral_mcp.assistant.prompts import build_prompt
from codestral_mcp.llm.client import CompletionClient
from codestral_mcp.llm.errors import CodestralError
from codestral_mcp.llm.models import ChatOptions, FimOptions, TaskKind
from codestral_mcp.observability import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class CodeTaskInput(BaseModel):
    """Arguments of the code_completion tool."""

    code: str
    language: str | None = None
    task: Literal["complete", "fix", "test"]


@dataclass
class ToolResult:
    """Text payload returned to the agent, flagged when it is an error."""

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Render in the protocol's {text, isError} shape."""
        result: dict[str, Any] = {"text": self.text}
        if self.is_error:
            result["isError"] = True
        return result


class CodeAssistant:
    """
    Runs code tasks against a completion client.

    The client is owned by the caller and shared across tasks.
    """

    def __init__(
        self,
        client: CompletionClient,
        chat_options: ChatOptions | None = None,
        fim_options: FimOptions | None = None,
    ):
        """
        Initialize the assistant.

        Args:
            client: The completion client to use.
            chat_options: Options for chat tasks (defaults when None).
            fim_options: Options for infill (defaults when None).
        """
        self._client = client
        self._chat_options = chat_options or ChatOptions()
        self._fim_options = fim_options or FimOptions()

    async def run(
        self,
        task: TaskKind,
        code: str,
        language: str | None = None,
        suffix: str | None = None,
    ) -> str:
        """
        Run a chat-based code task.

        Args:
            task: The task kind.
            code: The code to process.
            language: Optional language name.
            suffix: For FIM prompts, the code the result must end with.

        Returns:
            Extracted code (or the answer text when it has no code blocks).

        Raises:
            CodestralError: On any client or response failure.
        """
        with tracer.start_as_current_span("assistant.run") as span:
            span.set_attribute("task.kind", task.value)
            span.set_attribute("task.language", language or "")
            span.set_attribute("task.code_length", len(code))

            logger.info(f"Running {task.value} task ({language or 'unspecified language'})")
            messages = build_prompt(task, code, language, suffix)
            completion = await self._client.chat_completion(messages, self._chat_options)
            return format_completion(completion)

    async def infill(self, prefix: str, suffix: str | None = None) -> str:
        """
        Fill the gap between prefix and suffix using the FIM endpoint.

        Raises:
            CodestralError: On any client or response failure.
        """
        with tracer.start_as_current_span("assistant.infill") as span:
            span.set_attribute("task.prefix_length", len(prefix))
            span.set_attribute("task.suffix_length", len(suffix or ""))

            logger.info("Running infill task")
            options = self._fim_options.model_copy(update={"suffix": suffix})
            completion = await self._client.fim_completion(prefix, options)
            return format_completion(completion)

    async def handle(self, arguments: dict[str, Any] | None) -> ToolResult:
        """
        Process a code_completion tool call.

        Args:
            arguments: Raw tool arguments.

        Returns:
            ToolResult with the extracted code, or an error result.
        """
        try:
            params = CodeTaskInput.model_validate(arguments or {})
            text = await self.run(TaskKind(params.task), params.code, params.language)
        except ValidationError as e:
            logger.warning(f"Invalid code_completion arguments: {e}")
            return ToolResult(text=f"Error: Invalid arguments: {e}", is_error=True)
        except CodestralError as e:
            logger.error(f"Error processing code completion request: {e.message}")
            return ToolResult(text=f"Error: {e.message}", is_error=True)

        return ToolResult(text=text)
