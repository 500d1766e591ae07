from enum import Enum
from dataclasses import dataclass
from typing import Optional


class LLMTypes(Enum):
    OPENAI = "openai"
    GEMINI = "gemini"
    TOGETHERAI = "togetherai"


class LLMModels(Enum):
    # OpenAI models
    GPT_4O_MINI = "gpt-4o-mini"

    # Gemini models
    GEMINI_2_5_FLASH = "gemini-2.5-flash"
    GEMINI_2_5_FLASH_LITE = "gemini-2.5-flash-lite"

    # Together AI models (text-only, cannot read uploaded files)
    LLAMA_3_3_70B = "meta-llama/Llama-3.3-70B-Instruct-Turbo-Free"


DEFAULT_MODEL = LLMModels.GEMINI_2_5_FLASH.value

JSON_MIME_TYPE = "application/json"


@dataclass
class TaskLLMConfig:
    """LLM configuration for a specific task"""
    temperature: float
    max_tokens: Optional[int]


class TaskLLMConfigs:
    """LLM configurations for different tasks"""

    # Single-shot document review
    DOCUMENT_REVIEW = TaskLLMConfig(
        temperature=0.3,
        max_tokens=None   # Use model default
    )
