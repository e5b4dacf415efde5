# FILE: backend/secondbrain/services/llm_service.py
# 1. Single generative-text entry point used by the summary pipeline.
# 2. OpenAI-compatible client (OpenRouter by default), created lazily from settings.
# 3. Failures propagate; the summary provider decides what to do with them.

import logging
from typing import Optional
from openai import OpenAI

from ..core.config import settings

logger = logging.getLogger(__name__)

SUMMARY_INSTRUCTION = (
    "Please provide a detailed summary of the following content, including all key points "
    "and relevant details, in a human-readable format:"
)
MAX_INPUT_CHARS = 20000

_llm_client: Optional[OpenAI] = None

def get_llm_client() -> OpenAI:
    global _llm_client
    if _llm_client:
        return _llm_client
    if not settings.LLM_API_KEY:
        raise RuntimeError("LLM_API_KEY is not configured")
    _llm_client = OpenAI(api_key=settings.LLM_API_KEY, base_url=settings.LLM_BASE_URL)
    logger.info(f"LLM client initialised ({settings.LLM_BASE_URL}, model={settings.LLM_MODEL})")
    return _llm_client

def generate_text(prompt: str) -> str:
    client = get_llm_client()
    response = client.chat.completions.create(
        model=settings.LLM_MODEL,
        messages=[{"role": "user", "content": prompt}],
        temperature=0.3,
    )
    content = response.choices[0].message.content
    if not content or not content.strip():
        raise ValueError("Model returned an empty completion")
    return content

def generate_summary(text: str) -> str:
    """Summarizes `text` with the fixed summary instruction and returns the model output verbatim."""
    prompt = f"{SUMMARY_INSTRUCTION}\n\n{text[:MAX_INPUT_CHARS]}"
    return generate_text(prompt)
