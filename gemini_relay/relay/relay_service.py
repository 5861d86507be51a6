"""Service implementing the two-step answer-then-reformat relay.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from gemini_relay.core.errors import RelayError, UpstreamError, ValidationError
from gemini_relay.interfaces.llm_interface import LLMInterface

logger = logging.getLogger(__name__)

PROMPT_REQUIRED_MESSAGE = "Prompt is required."

# Second-call instruction. {initial_text} is replaced verbatim with the first answer.
REFORMAT_PROMPT_TEMPLATE = """
You are an engaging and helpful AI assistant.
Take the following text and reformat it into a structured, human-readable, and engaging response.
Use relevant emojis to highlight points, create sections, and make the content more appealing.
Maintain a friendly and enthusiastic tone.

Original Text:
"{initial_text}"
"""


@dataclass(frozen=True)
class InitialAnswer:
    """The model's raw answer to the user's prompt (output of the first call)."""

    text: str


class RelayService:
    """Orchestrates the relay: prompt -> initial answer -> reformatted final answer.
    """

    def __init__(self, llm: LLMInterface, reformat_template: str = REFORMAT_PROMPT_TEMPLATE):
        """Initializes the RelayService.

        Args:
            llm: An instance conforming to LLMInterface.
            reformat_template: Template for the second call; must contain `{initial_text}`.
        """
        if "{initial_text}" not in reformat_template:
            raise ValueError("reformat_template must contain an '{initial_text}' placeholder.")
        self.llm = llm
        self.reformat_template = reformat_template

    @staticmethod
    def validate_prompt(prompt: Optional[str]) -> str:
        if not prompt:
            raise ValidationError(PROMPT_REQUIRED_MESSAGE)
        return prompt

    async def fetch_initial_answer(self, prompt: str) -> InitialAnswer:
        text = await self._call_llm(prompt)
        return InitialAnswer(text=text)

    def build_reformat_prompt(self, initial: InitialAnswer) -> str:
        # str.replace rather than format() so braces in the answer are left alone
        return self.reformat_template.replace("{initial_text}", initial.text)

    async def fetch_final_answer(self, initial: InitialAnswer) -> str:
        return await self._call_llm(self.build_reformat_prompt(initial))

    async def relay(self, prompt: Optional[str]) -> str:
        """Answers a prompt and returns the model's reformatted version of that answer.

        Args:
            prompt: The user's prompt. Must be present and non-empty.

        Returns:
            The final (reformatted) answer.

        Raises:
            ValidationError: If the prompt is missing or empty. No call is made.
            UpstreamError: If either model call fails. The second call is not
                made when the first one fails.
        """
        prompt = self.validate_prompt(prompt)
        logger.info(f"Relaying prompt: '{prompt[:50]}...'")

        initial = await self.fetch_initial_answer(prompt)
        logger.debug(f"Initial answer (first 100 chars): '{initial.text[:100]}...'")

        final_text = await self.fetch_final_answer(initial)
        logger.info(f"Relay complete, final answer is {len(final_text)} characters.")
        return final_text

    async def _call_llm(self, prompt: str) -> str:
        try:
            return await self.llm.generate(prompt)
        except RelayError:
            raise
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}", exc_info=True)
            raise UpstreamError(str(e) or e.__class__.__name__) from e
