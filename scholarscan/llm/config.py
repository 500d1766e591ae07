import os
from typing import Optional
from dotenv import load_dotenv

from .constants import LLMTypes, DEFAULT_MODEL

# Load environment variables from .env file
load_dotenv()


def load_api_key(model_type: LLMTypes) -> Optional[str]:
    """
    Look up the key for a provider in the environment (or .env)

    GOOGLE_API_KEY serves the Gemini review models, which are the default here.
    OpenAI and Together keys are only needed when SCHOLARSCAN_MODEL points at one of theirs.

    Returns:
        the key, or None when the variable is unset
    """
    env_var_map = {
        LLMTypes.OPENAI: "OPENAI_API_KEY",
        LLMTypes.GEMINI: "GOOGLE_API_KEY",
        LLMTypes.TOGETHERAI: "TOGETHER_API_KEY"
    }

    env_var = env_var_map.get(model_type)
    if env_var:
        return os.getenv(env_var)
    return None


def load_model_name() -> str:
    """Model used for reviews; SCHOLARSCAN_MODEL overrides the default."""
    return os.getenv("SCHOLARSCAN_MODEL") or DEFAULT_MODEL
