"""ai-connectors: configure LLM provider keys, pick an active model and send prompts."""

__version__ = "0.3.0"

__all__ = ["__version__"]
