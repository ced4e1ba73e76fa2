import asyncio
import json
import logging
import re
from collections.abc import Iterable
from typing import Any

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion, ChatCompletionMessageParam

__all__ = ["safe_chat_completion", "completion_text", "extract_json_payload"]


async def safe_chat_completion(
    client: AsyncOpenAI,
    *,
    model: str,
    messages: Iterable[dict[str, Any]],
    logger: logging.Logger | None = None,
    retry_attempts: int = 1,
    retry_backoff: float = 1.0,
    **kwargs,
) -> ChatCompletion:
    """Invoke the OpenAI chat completion endpoint, optionally retrying.

    Parameters
    ----------
    client:
        An initialised ``openai.AsyncOpenAI`` client instance.
    model:
        The model name to call (e.g. ``"gpt-4o-mini"``).
    messages:
        The messages for the chat completion endpoint.
    logger:
        Optional logger for diagnostics; if omitted a module-level logger is used.
    retry_attempts:
        Total number of attempts. The default of one means no retry.
    retry_backoff:
        Base back-off (in seconds) between attempts, doubled each time.
    **kwargs:
        Forwarded to ``client.chat.completions.create`` (e.g. ``response_format``).

    Raises
    ------
    RuntimeError
        If no client is supplied.
    TypeError
        If a synchronous client is supplied.
    Exception
        The last error encountered once all attempts fail.
    """
    if client is None:
        raise RuntimeError("OpenAI client is not initialised.")
    if not isinstance(client, AsyncOpenAI):
        raise TypeError("Sync OpenAI client provided to async safe_chat_completion.")
    if retry_attempts < 1:
        raise ValueError("retry_attempts must be at least 1.")

    logger = logger or logging.getLogger(__name__)
    typed_messages: Iterable[ChatCompletionMessageParam] = messages  # type: ignore[assignment]
    last_exc: Exception | None = None

    for attempt in range(1, retry_attempts + 1):
        try:
            start_ts = asyncio.get_running_loop().time()
            completion = await client.chat.completions.create(
                model=model,
                messages=typed_messages,
                **kwargs,
            )
            latency = asyncio.get_running_loop().time() - start_ts
            logger.debug(
                "OpenAI completions.create call succeeded | model=%s | latency=%.2fs",
                model,
                latency,
            )
            return completion
        except Exception as exc:  # noqa: BLE001
            last_exc = exc
            logger.warning("OpenAI call failed (attempt %s/%s): %s", attempt, retry_attempts, exc)
            if attempt < retry_attempts:
                await asyncio.sleep(retry_backoff * (2 ** (attempt - 1)))

    assert last_exc is not None  # for type checkers
    raise last_exc


def completion_text(completion: ChatCompletion | None) -> str:
    """Return the stripped text of the first choice, or an empty string."""
    if completion and completion.choices and completion.choices[0].message.content:
        return completion.choices[0].message.content.strip()
    return ""


_FENCED_JSON = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def extract_json_payload(text: str) -> Any:
    """Parse JSON from model output, tolerating Markdown code fences.

    Raises
    ------
    json.JSONDecodeError
        If no JSON document can be parsed.
    """
    match = _FENCED_JSON.search(text)
    candidate = match.group(1).strip() if match else text.strip()
    return json.loads(candidate)
