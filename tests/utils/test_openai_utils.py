import json
import logging
from unittest.mock import AsyncMock, patch

import pytest
from openai import OpenAI

from tests.mocks import create_mock_completion, make_mock_client
from utils.openai_utils import completion_text, extract_json_payload, safe_chat_completion


@pytest.mark.asyncio
async def test_safe_chat_completion_success(caplog):
    """Successful call forwards kwargs and logs latency."""
    create = AsyncMock(return_value=create_mock_completion("Test response content"))
    client = make_mock_client(create)
    messages = [{"role": "user", "content": "Test message"}]

    with caplog.at_level(logging.DEBUG):
        completion = await safe_chat_completion(
            client,
            model="gpt-test",
            messages=messages,
            logger=logging.getLogger("test_logger"),
            temperature=0.7,
            response_format={"type": "json_object"},
        )

    create.assert_called_once_with(
        model="gpt-test",
        messages=messages,
        temperature=0.7,
        response_format={"type": "json_object"},
    )
    assert completion is create.return_value
    assert "OpenAI completions.create call succeeded" in caplog.text
    assert "model=gpt-test" in caplog.text


@pytest.mark.asyncio
async def test_safe_chat_completion_does_not_retry_by_default(caplog):
    error = TimeoutError("API timed out")
    create = AsyncMock(side_effect=error)

    with (
        patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep,
        pytest.raises(TimeoutError) as excinfo,
        caplog.at_level(logging.WARNING),
    ):
        await safe_chat_completion(make_mock_client(create), model="gpt-fail", messages=[])

    assert excinfo.value is error
    assert create.call_count == 1
    mock_sleep.assert_not_called()
    assert "OpenAI call failed (attempt 1/1): API timed out" in caplog.text


@pytest.mark.asyncio
async def test_safe_chat_completion_retries_with_backoff():
    success = create_mock_completion("Success after retry")
    create = AsyncMock(side_effect=[TimeoutError("first"), TimeoutError("second"), success])

    with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        completion = await safe_chat_completion(
            make_mock_client(create),
            model="gpt-retry",
            messages=[],
            retry_attempts=3,
            retry_backoff=0.1,
        )

    assert completion is success
    assert create.call_count == 3
    assert [c.args[0] for c in mock_sleep.call_args_list] == [0.1, 0.2]


@pytest.mark.asyncio
async def test_safe_chat_completion_invalid_arguments():
    with pytest.raises(RuntimeError, match="OpenAI client is not initialised."):
        await safe_chat_completion(None, model="m", messages=[])  # type: ignore[arg-type]

    with pytest.raises(TypeError, match="Sync OpenAI client provided"):
        await safe_chat_completion(OpenAI(api_key="test-key"), model="m", messages=[])

    with pytest.raises(ValueError, match="retry_attempts"):
        await safe_chat_completion(make_mock_client(AsyncMock()), model="m", messages=[], retry_attempts=0)


def test_completion_text():
    assert completion_text(create_mock_completion("  hello \n")) == "hello"
    assert completion_text(create_mock_completion(None)) == ""
    assert completion_text(None) == ""


@pytest.mark.parametrize(
    "text",
    [
        '{"strategies": []}',
        '```json\n{"strategies": []}\n```',
        'Sure! ```\n{"strategies": []}\n``` Good luck.',
    ],
)
def test_extract_json_payload(text):
    assert extract_json_payload(text) == {"strategies": []}


def test_extract_json_payload_rejects_prose():
    with pytest.raises(json.JSONDecodeError):
        extract_json_payload("no json here")
