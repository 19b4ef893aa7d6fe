from chartgpt.core.llm.service import clear_llm_cache, create_llm

__all__ = ["clear_llm_cache", "create_llm"]
