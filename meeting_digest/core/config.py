"""Simple configuration for core library usage."""

from dataclasses import dataclass

from meeting_digest.core import prompts


@dataclass
class SummarizerConfig:
    """Configuration for the meeting digest core library.

    This is a plain config suitable for library usage without environment
    variable loading. The service builds one from its settings.

    Args:
        api_base_url: Base URL of the generative-language API
        model: Model name used for both summarization and chat
        temperature: Sampling temperature for the summarization call
        timeout_s: Total timeout for upstream requests in seconds
        connect_timeout_s: Connection timeout for upstream requests in seconds
        system_instruction: System instruction demanding the two-section output
        summary_prompt: User text sent after the audio parts
        three_line_marker: Marker introducing the bullet section
        detailed_marker: Marker introducing the narrative section
        chat_priming_prompt: User text that seeds the chat context
        chat_priming_reply: Model text that acknowledges the seeded context
    """

    api_base_url: str = "https://generativelanguage.googleapis.com"
    model: str = "gemini-2.5-flash"
    temperature: float = 0.3
    timeout_s: float = 300.0
    connect_timeout_s: float = 10.0

    # Prompt settings
    system_instruction: str = prompts.SYSTEM_INSTRUCTION
    summary_prompt: str = prompts.SUMMARY_PROMPT
    three_line_marker: str = prompts.THREE_LINE_MARKER
    detailed_marker: str = prompts.DETAILED_MARKER
    chat_priming_prompt: str = prompts.CHAT_PRIMING_PROMPT
    chat_priming_reply: str = prompts.CHAT_PRIMING_REPLY

    @property
    def generate_content_url(self) -> str:
        """Return the generateContent endpoint for the configured model."""
        return f"{self.api_base_url.rstrip('/')}/v1beta/models/{self.model}:generateContent"
