"""
client.py

PURPOSE: Abstract completion client interface.
DEPENDENCIES: None (pure Python + typing)

ARCHITECTURE NOTES:
The assistant layer depends on this interface rather than on the Mistral
implementation, so tests can substitute a fake client.
"""

from abc import ABC, abstractmethod

from codestral_mcp.llm.models import ChatOptions, CompletionResponse, FimOptions, Message


class CompletionClient(ABC):
    """Abstract base class for completion clients."""

    @abstractmethod
    async def validate_credential(self) -> None:
        """
        Probe the remote service with the configured credential.

        Raises:
            AuthError: If the credential is rejected.
            TransportError: On any other failure.
        """
        ...

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[Message],
        options: ChatOptions | None = None,
    ) -> CompletionResponse:
        """
        Request a chat completion.

        Args:
            messages: Ordered conversation, system message first.
            options: Sampling options; defaults apply when None.

        Returns:
            The validated CompletionResponse.
        """
        ...

    @abstractmethod
    async def fim_completion(
        self,
        prompt: str,
        options: FimOptions | None = None,
    ) -> CompletionResponse:
        """
        Request a fill-in-the-middle completion.

        Args:
            prompt: Code before the gap.
            options: FIM options, including the optional suffix.

        Returns:
            The validated CompletionResponse.
        """
        ...
