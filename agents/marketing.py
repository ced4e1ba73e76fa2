"""
Module: agents.marketing

Contains the MarketingStrategyAgent, which asks a generative model for
marketing strategies for a product and degrades to a static fallback list
whenever the model cannot be reached or answers with unusable output.
"""

import asyncio
import json
import logging
import os
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any

from openai import AsyncOpenAI
from pydantic import ValidationError

from agents.prompts import MARKETING_SYSTEM_PROMPT, build_marketing_strategy_prompt
from config.config import StrategyRequestConfig
from models.enums import StrategyTrigger
from models.inventory import Product
from models.marketing import MarketingStrategy, fallback_strategies
from utils.openai_utils import completion_text, extract_json_payload, safe_chat_completion

logger = logging.getLogger(__name__)


def _strategy_items(payload: Any) -> list[Any] | None:
    """Find the list of strategy objects in a parsed model response."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        if isinstance(payload.get("strategies"), list):
            return payload["strategies"]
        for value in payload.values():
            if isinstance(value, list):
                return value
    return None


def parse_strategies(text: str) -> list[MarketingStrategy]:
    """
    Turn model output into validated strategies.

    Entries that fail validation are dropped.

    Raises:
        ValueError: If the text is not JSON or holds no list of strategies.
    """
    payload = extract_json_payload(text)
    items = _strategy_items(payload)
    if items is None:
        raise ValueError(f"Model response has no strategy list: {text[:100]}")
    strategies = []
    for item in items:
        try:
            strategies.append(MarketingStrategy.model_validate(item))
        except ValidationError as exc:
            logger.warning(f"Dropping invalid strategy entry {item!r}: {exc.error_count()} errors")
    return strategies


class MarketingStrategyAgent:
    """
    Requests marketing strategies for products from an OpenAI chat model.

    ``request`` never raises: any failure is logged and answered with the
    one-item fallback list. Requests for the same product are serialised;
    different products proceed independently.
    """

    def __init__(
        self,
        api_key: str | None = None,
        config: StrategyRequestConfig | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.config = config or StrategyRequestConfig()
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = defaultdict(int)

        if client is not None:
            self.client = client
            return

        resolved_key = api_key or os.getenv(self.config.api_key_env)
        if resolved_key and resolved_key != "YOUR_API_KEY_HERE":
            try:
                # Retries are governed by safe_chat_completion alone
                self.client = AsyncOpenAI(api_key=resolved_key, max_retries=0)
                logger.info("AsyncOpenAI client initialized successfully.")
            except Exception as e:
                self.client = None
                logger.error(f"Failed to initialize OpenAI client: {e}")
        else:
            self.client = None
            logger.warning("OpenAI API key missing or placeholder. Strategy requests will use the fallback.")

    @asynccontextmanager
    async def product_lock(self, product_id: str):
        """Hold the product's lock; it is dropped once nobody holds or awaits it."""
        lock = self._locks.setdefault(product_id, asyncio.Lock())
        self._lock_users[product_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[product_id] -= 1
            if not self._lock_users[product_id]:
                del self._lock_users[product_id]
                del self._locks[product_id]

    def locked_products(self) -> list[str]:
        """Product ids with a request in flight or queued."""
        return list(self._locks)

    async def request(self, product: Product, reason: str | StrategyTrigger) -> list[MarketingStrategy]:
        """
        Ask the model for strategies for ``product`` in the given situation.

        Args:
            product: The product to promote.
            reason: Situation label passed to the model (e.g. a StrategyTrigger).

        Returns:
            The parsed strategies (usually four), an empty list when the model
            returns no content, or the fallback list on any failure.
        """
        reason_label = reason.value if isinstance(reason, StrategyTrigger) else reason
        async with self.product_lock(product.id):
            if self.client is None:
                logger.error(f"No OpenAI client; returning fallback strategies for {product.id}.")
                return fallback_strategies()

            logger.info(f"Requesting marketing strategies for {product.id} ({reason_label})")
            try:
                messages = [
                    {"role": "system", "content": MARKETING_SYSTEM_PROMPT},
                    {"role": "user", "content": build_marketing_strategy_prompt(product, reason_label)},
                ]
                completion = await safe_chat_completion(
                    self.client,
                    model=self.config.model,
                    messages=messages,
                    logger=logger,
                    retry_attempts=self.config.retry_attempts,
                    retry_backoff=self.config.retry_backoff,
                    max_tokens=self.config.max_tokens,
                    temperature=self.config.temperature,
                    response_format={"type": "json_object"},
                )
                text = completion_text(completion)
                if not text:
                    logger.warning(f"Strategy request for {product.id} returned no content.")
                    return []
                strategies = parse_strategies(text)
            except (json.JSONDecodeError, ValueError) as e:
                logger.error(f"Strategy response for {product.id} could not be parsed: {e}")
                return fallback_strategies()
            except Exception as e:  # noqa: BLE001
                logger.error(f"Strategy request for {product.id} failed: {e}", exc_info=True)
                return fallback_strategies()

            logger.debug(f"Received {len(strategies)} strategies for {product.id}")
            return strategies
