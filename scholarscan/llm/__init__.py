from .base import LLMClient
from .constants import LLMTypes, LLMModels, TaskLLMConfigs
from .config import load_api_key, load_model_name

__all__ = ['LLMClient', 'LLMTypes', 'LLMModels', 'TaskLLMConfigs', 'load_api_key', 'load_model_name']
