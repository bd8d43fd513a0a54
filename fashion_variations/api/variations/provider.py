import os
from functools import lru_cache
from typing import Optional

from openai import AsyncOpenAI


@lru_cache(maxsize=4)
def _build_client(api_key: str) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key)


def get_provider_client() -> Optional[AsyncOpenAI]:
    """
    Returns the OpenAI client when a key is configured, otherwise None (demo mode).

    The client is built once per key and reused across requests. Used as a
    FastAPI dependency so routes and tests can swap it out.
    """
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if not api_key:
        return None
    return _build_client(api_key)


def provider_configured() -> bool:
    return bool((os.getenv("OPENAI_API_KEY") or "").strip())
