"""
LangChain chat-model provider for food identification.

Sends the image plus a fixed instruction to a vision-capable model (Gemini by
default) and parses the JSON array it returns.
"""

import json
import logging
import re
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from nutriscan_api.agents.prompts import FOOD_IDENTIFICATION_PROMPT
from nutriscan_api.core.exceptions import ParseError, TransportError
from nutriscan_api.models.food_scan import IdentifiedFoodItem

from .base import FoodIdentificationService

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```json|```")
_ITEMS_ADAPTER = TypeAdapter(list[IdentifiedFoodItem])


def _reject_constant(token: str) -> float:
    raise ValueError(f"{token} is not valid JSON")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fence markers the model may wrap JSON in."""
    return _FENCE_PATTERN.sub("", text).strip()


def parse_identified_items(raw_response: str, provider: str = "unknown") -> list[IdentifiedFoodItem]:
    """
    Parse a model response into identified food items.

    Raises:
        ParseError: If the cleaned text is not a JSON array of
            ``{"name", "estimatedGrams"}`` objects
    """
    cleaned = strip_code_fences(raw_response)

    try:
        data = json.loads(cleaned, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning(f"Failed to parse identification JSON: {e}")
        raise ParseError(
            message=f"Identification response is not valid JSON: {e}",
            provider=provider,
            details={"raw_response": raw_response[:500]},
        ) from e

    if not isinstance(data, list):
        raise ParseError(
            message=f"Expected a JSON array, got {type(data).__name__}",
            provider=provider,
            details={"raw_response": raw_response[:500]},
        )

    try:
        return _ITEMS_ADAPTER.validate_python(data)
    except PydanticValidationError as e:
        logger.warning(f"Identification items have unexpected shape: {e}")
        raise ParseError(
            message="Identification items do not match the expected shape",
            provider=provider,
            details={"raw_response": raw_response[:500], "errors": e.errors()},
        ) from e


def _response_text(content: Any) -> str:
    """Flatten chat-model content (string or list of parts) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class LLMFoodIdentification(FoodIdentificationService):
    """
    Food identification using a LangChain vision chat model.
    """

    def __init__(self, llm: BaseChatModel, mime_type: str = "image/jpeg"):
        """
        Initialize the provider.

        Args:
            llm: Vision-capable chat model
            mime_type: MIME type used for the inline image data URL
        """
        self.llm = llm
        self.mime_type = mime_type

    @property
    def provider_name(self) -> str:
        model = getattr(self.llm, "model", None) or getattr(self.llm, "model_name", "unknown")
        return f"llm/{model}"

    def build_messages(self, image_b64: str) -> list[HumanMessage]:
        """Build the single prompt + image message."""
        return [
            HumanMessage(
                content=[
                    {"type": "text", "text": FOOD_IDENTIFICATION_PROMPT},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{self.mime_type};base64,{image_b64}"},
                    },
                ]
            )
        ]

    async def identify(self, image_b64: str) -> list[IdentifiedFoodItem]:
        """Identify foods in a base64 JPEG."""
        logger.info(f"Sending food identification request to {self.provider_name}")

        try:
            response = await self.llm.ainvoke(self.build_messages(image_b64))
        except Exception as e:
            logger.error(f"Food identification call failed: {e}")
            raise TransportError(
                message=f"Food identification request failed: {e}",
                provider=self.provider_name,
            ) from e

        raw_response = _response_text(response.content).strip()
        logger.debug(f"Raw identification response: {raw_response[:500]}")

        items = parse_identified_items(raw_response, provider=self.provider_name)

        logger.info(f"Identified {len(items)} food item(s)")
        return items
