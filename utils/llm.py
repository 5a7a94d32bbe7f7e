"""Claude API client used as the content-generation transport."""

import os
import time

import anthropic

from config.defaults import DEFAULTS
from core.errors import TransportError

TRUNCATION_MARKER = "<!-- TRUNCATED: Response hit token limit -->"

CONNECT_ATTEMPTS = 2
RETRY_DELAY_SECONDS = 2


def get_client():
    """Return an Anthropic client. Raises TransportError if no API key is set."""
    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        raise TransportError(
            "ANTHROPIC_API_KEY is not set; export it before generating "
            "(keys are issued at https://console.anthropic.com/)"
        )
    return anthropic.Anthropic(api_key=api_key, timeout=DEFAULTS["request_timeout"])


def _stream_text(client, system_prompt, user_message):
    # Streaming keeps long generations clear of the SDK's non-streaming timeout
    with client.messages.stream(
        model=DEFAULTS["model"],
        max_tokens=DEFAULTS["max_tokens"],
        system=system_prompt,
        messages=[{"role": "user", "content": user_message}],
    ) as stream:
        text = "".join(stream.text_stream)
        final = stream.get_final_message()

    if final.stop_reason == "max_tokens":
        # Cut off mid-answer: a structured payload is likely incomplete
        text += "\n\n" + TRUNCATION_MARKER
    return text


def call_llm(system_prompt, user_message):
    """Send one system/user pair and return the raw text of the reply.

    The text carries no format guarantee; callers classify it themselves.
    A dropped connection is retried once; every other API failure is raised
    as TransportError straight away.
    """
    client = get_client()

    last_error = None
    for attempt in range(1, CONNECT_ATTEMPTS + 1):
        try:
            return _stream_text(client, system_prompt, user_message)
        except anthropic.APIConnectionError as e:
            last_error = e
            if attempt < CONNECT_ATTEMPTS:
                time.sleep(RETRY_DELAY_SECONDS)
        except anthropic.APIError as e:
            raise TransportError(f"Generation API error: {e}") from e

    raise TransportError(f"Generation API unreachable: {last_error}") from last_error
