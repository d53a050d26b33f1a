from .clients import (
    AnthropicGenerationClient,
    BaseGenerationClient,
    OpenAIGenerationClient,
    create_generation_client,
    enforce_output_constraints,
)
from .prompts import GenerationRequest, PromptComposer, RequestKind, build_persona

__all__ = [
    "AnthropicGenerationClient",
    "BaseGenerationClient",
    "OpenAIGenerationClient",
    "create_generation_client",
    "enforce_output_constraints",
    "GenerationRequest",
    "PromptComposer",
    "RequestKind",
    "build_persona",
]
