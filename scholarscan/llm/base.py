
import base64
import logging
from typing import List, Dict, Any, Optional

# Import all LLM clients at the top
import openai
from google import genai
from google.genai import types
from together import Together

from .constants import LLMTypes, JSON_MIME_TYPE
from .config import load_api_key

logger = logging.getLogger(__name__)


class LLMClient:
    """
    LLM client supporting Gemini, OpenAI, and Together AI for single-shot structured reviews.

    Content is passed as an ordered list of provider-neutral parts:
        {"inline_data": {"mime_type": "application/pdf", "data": "<base64>", "name": "paper.pdf"}}
        {"text": "pasted document text"}
    """

    def __init__(self, model_name: str, model_type: Optional[LLMTypes] = None, api_key: Optional[str] = None):
        """
        Initialize the LLM client

        Args:
            model_name: Specific model name to use (e.g., "gemini-2.5-flash", "gpt-4o-mini")
            model_type: LLM provider type (if None, auto-detects from model name)
            api_key: API key for the service (if None, loads from environment)
        """
        self.model_name = model_name
        self.model_type = model_type or self._get_model_type_from_name(model_name)

        # Load API key from environment if not provided
        if api_key is None:
            api_key = load_api_key(self.model_type)

        if not api_key:
            raise ValueError(f"No API key found for {self.model_type.value}. Please set the appropriate environment variable.")

        # Initialize the appropriate client
        self._init_client(api_key)

    def _get_model_type_from_name(self, model_name: str) -> LLMTypes:
        """Determine the LLM provider from the model name string."""
        model_name_lower = model_name.lower()
        if "gemini" in model_name_lower:
            return LLMTypes.GEMINI
        elif "gpt" in model_name_lower or model_name_lower.startswith("o1"):
            return LLMTypes.OPENAI
        elif any(x in model_name_lower for x in ["llama", "meta-llama", "mistral", "qwen", "mixtral"]):
            return LLMTypes.TOGETHERAI
        else:
            # Documents are sent as inline files, so default to Gemini
            return LLMTypes.GEMINI

    def _init_client(self, api_key: str):
        """Initialize the specific LLM client based on model type"""
        if self.model_type == LLMTypes.OPENAI:
            self.client = openai.OpenAI(api_key=api_key)
        elif self.model_type == LLMTypes.GEMINI:
            self.client = genai.Client(api_key=api_key)
        elif self.model_type == LLMTypes.TOGETHERAI:
            self.client = Together(api_key=api_key)

    def generate_structured(self, parts: List[Dict[str, Any]], system: str, response_schema: Dict[str, Any],
                            temperature: float = 0.3, max_tokens: Optional[int] = None) -> str:
        """
        Generate a JSON response constrained by a response schema and return the raw text

        Args:
            parts: Ordered content parts (inline file data and/or text)
            system: System instruction
            response_schema: JSON schema the response must follow
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (None for model default)

        Returns:
            Generated text response (may be empty if the model produced nothing)
        """
        logger.info("Requesting structured review from %s (%d parts)", self.model_name, len(parts))
        if self.model_type == LLMTypes.GEMINI:
            return self._generate_gemini(parts, system, response_schema, temperature, max_tokens)
        elif self.model_type == LLMTypes.OPENAI:
            return self._generate_openai(parts, system, response_schema, temperature, max_tokens)
        elif self.model_type == LLMTypes.TOGETHERAI:
            return self._generate_together(parts, system, response_schema, temperature, max_tokens)
        else:
            raise ValueError(f"Unsupported model type: {self.model_type}")

    def _generate_gemini(self, parts: List[Dict[str, Any]], system: str, response_schema: Dict[str, Any],
                         temperature: float, max_tokens: Optional[int]) -> str:
        """Generate using Gemini API"""
        gemini_parts = []
        for part in parts:
            if "inline_data" in part:
                blob = part["inline_data"]
                gemini_parts.append(types.Part.from_bytes(data=base64.b64decode(blob["data"]),
                                                          mime_type=blob["mime_type"]))
            else:
                gemini_parts.append(types.Part.from_text(text=part["text"]))

        config_params = {"system_instruction": system,
                         "response_mime_type": JSON_MIME_TYPE,
                         "response_json_schema": response_schema,
                         "temperature": temperature}
        if max_tokens is not None:
            config_params["max_output_tokens"] = max_tokens

        config = types.GenerateContentConfig(**config_params)

        response = self.client.models.generate_content(
            model=self.model_name,
            contents=[types.Content(role="user", parts=gemini_parts)],
            config=config
        )
        return response.text or ""

    def _generate_openai(self, parts: List[Dict[str, Any]], system: str, response_schema: Dict[str, Any],
                         temperature: float, max_tokens: Optional[int]) -> str:
        """Generate using OpenAI API"""
        content = []
        for part in parts:
            if "inline_data" in part:
                blob = part["inline_data"]
                content.append({
                    "type": "file",
                    "file": {
                        "filename": blob.get("name") or "document",
                        "file_data": f"data:{blob['mime_type']};base64,{blob['data']}",
                    },
                })
            else:
                content.append({"type": "text", "text": part["text"]})

        response = self.client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "system", "content": system},
                      {"role": "user", "content": content}],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "review_feedback", "schema": response_schema},
            },
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""

    def _generate_together(self, parts: List[Dict[str, Any]], system: str, response_schema: Dict[str, Any],
                           temperature: float, max_tokens: Optional[int]) -> str:
        """Generate using Together AI API (text parts only)"""
        if any("inline_data" in part for part in parts):
            raise ValueError(f"{self.model_name} cannot read uploaded files. Paste the document text instead.")

        together_messages = [{"role": "system", "content": system}]
        together_messages.extend({"role": "user", "content": part["text"]} for part in parts)

        response = self.client.chat.completions.create(
            model=self.model_name,
            max_tokens=max_tokens or 8193,
            messages=together_messages,
            response_format={"type": "json_object", "schema": response_schema},
            temperature=temperature,
        )

        return response.choices[0].message.content or ""
