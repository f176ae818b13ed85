import os
import logging
from typing import Optional
from dotenv import load_dotenv
from groq import AsyncGroq

load_dotenv()

logger = logging.getLogger(__name__)

_client: Optional[AsyncGroq] = None


def get_groq() -> AsyncGroq:
    global _client
    if _client is None:
        # A missing key is reported by the provider as an authentication error
        _client = AsyncGroq(api_key=os.getenv("GROQ_API_KEY") or "gsk_placeholder")
    return _client


async def generate_completion(
    system_prompt: str,
    user_prompt: str,
    model: str,
    temperature: float = 0.7,
    max_tokens: Optional[int] = None,
) -> str:
    """
    Send one system/user message pair to Groq and return the text reply.
    Args:
        system_prompt: System prompt for LLM.
        user_prompt: The task prompt.
        model: Provider model id.
        temperature: Sampling temperature.
        max_tokens: Completion cap; None leaves the provider default.
    Returns:
        The stripped completion text.
    Raises:
        groq.APIError (or subclasses) if the API call fails.
    """
    params = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": temperature,
        "stream": False,
    }
    if max_tokens:
        params["max_tokens"] = max_tokens

    response = await get_groq().chat.completions.create(**params)
    answer = response.choices[0].message.content or ""
    return answer.strip()
