"""
Chefsito - Ingredient Scanner.

Sends kitchen/fridge/pantry photos to a vision-capable chat model and
reads back the ingredients it can see. The model only identifies food;
recipes always come from the recipe API.
"""

import base64
import json
import logging
import re
from pathlib import Path

from openai import AsyncOpenAI

from chefsito.config import settings
from chefsito.errors import ResponseParseError
from chefsito.models.recipe import IngredientScanResult

logger = logging.getLogger(__name__)

VISION_MODEL = "gpt-4o"

SCAN_PROMPT = """Analyze these images of a kitchen/refrigerator/pantry and identify all visible food ingredients.

Rules:
- List ONLY food items that can be used as cooking ingredients
- Be specific (e.g., "chicken breast" not just "meat")
- Include quantities if clearly visible (e.g., "2 tomatoes", "1 bunch of cilantro")
- Include condiments, sauces, and spices if visible
- Ignore non-food items, packaging without clear food content
- If an item is partially visible or unclear, make your best educated guess
- Use common ingredient names that would be found in recipes

Respond ONLY with a JSON object in this exact format:
{
  "ingredients": ["ingredient 1", "ingredient 2", ...],
  "confidence": "high" | "medium" | "low",
  "notes": "any relevant observations"
}"""

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def extract_json(text: str) -> str:
    """
    Best-effort JSON extraction from a model reply.

    Returns the first fenced code block, else the outermost {...} span,
    else the text unchanged.
    """
    fenced = _CODE_FENCE_RE.search(text)
    if fenced:
        return fenced.group(1).strip()

    obj = _JSON_OBJECT_RE.search(text)
    if obj:
        return obj.group(0)

    return text


def encode_image(image: Path | str | bytes) -> str:
    """Encode an image as a base64 JPEG data URL."""
    data = image if isinstance(image, bytes) else Path(image).read_bytes()
    return f"data:image/jpeg;base64,{base64.b64encode(data).decode('ascii')}"


def build_messages(images: list[Path | str | bytes]) -> list[dict]:
    content: list[dict] = [{"type": "text", "text": SCAN_PROMPT}]
    for image in images:
        content.append({"type": "image_url", "image_url": {"url": encode_image(image)}})
    return [{"role": "user", "content": content}]


def parse_scan_reply(reply: str, additional_items: list[str] | None = None) -> IngredientScanResult:
    """
    Parse the model's reply into an IngredientScanResult.

    Raises:
        ResponseParseError: If no JSON object can be recovered
    """
    try:
        data = json.loads(extract_json(reply))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Could not parse ingredient scan reply: {e}") from e
    if not isinstance(data, dict):
        raise ResponseParseError("Ingredient scan reply is not a JSON object")

    return IngredientScanResult(
        detected_ingredients=[str(i) for i in data.get("ingredients") or []],
        additional_items=list(additional_items or []),
        confidence=data.get("confidence"),
        notes=data.get("notes"),
        raw_analysis=reply,
    )


class IngredientScanner:
    """Detects ingredients in photos with an OpenAI vision model."""

    def __init__(self, client: AsyncOpenAI | None = None, model: str = VISION_MODEL):
        self._client = client
        self.model = model

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=settings.require_api_key("openai"))
        return self._client

    async def analyze_ingredients(
        self,
        images: list[Path | str | bytes],
        additional_items: list[str] | None = None,
    ) -> IngredientScanResult:
        """
        Identify the ingredients visible in the given images.

        Args:
            images: Image file paths or raw JPEG bytes
            additional_items: Ingredients the user typed in alongside the photos

        Raises:
            ConfigurationError: If no OpenAI key is configured
            ResponseParseError: If the model reply is empty or not JSON
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=build_messages(images),
            max_tokens=1000,
            temperature=0.3,
        )

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ResponseParseError("No response from the vision model")

        result = parse_scan_reply(content, additional_items)
        logger.info(f"Detected {len(result.detected_ingredients)} ingredients (confidence={result.confidence})")
        return result
