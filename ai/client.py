# ai/client.py
from functools import lru_cache

from openai import AsyncOpenAI

from settings import OPENAI_API_KEY, OPENAI_MODEL


@lru_cache(maxsize=1)
def get_client() -> AsyncOpenAI:
    if not OPENAI_API_KEY:
        raise RuntimeError("Missing OPENAI_API_KEY")
    return AsyncOpenAI(api_key=OPENAI_API_KEY)


async def complete_prompt(prompt: str, *, temperature: float = 0.0) -> str:
    """Single-turn chat completion; returns the stripped reply text."""
    response = await get_client().chat.completions.create(
        model=OPENAI_MODEL,
        messages=[{"role": "user", "content": prompt}],
        temperature=temperature,
    )
    return (response.choices[0].message.content or "").strip()
