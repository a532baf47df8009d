import asyncio
import logging

import httpx

from common.config import Settings
from common.constants import MODEL_BACKOFF_S, MODEL_MAX_ATTEMPTS, MODEL_TIMEOUT_S
from core.errors import ModelCallError

# Connection resets and I/O failures. Timeouts and status errors are not retried.
TRANSIENT_ERRORS = (httpx.NetworkError, httpx.RemoteProtocolError)


class OpenAIChatClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = MODEL_TIMEOUT_S,
        max_attempts: int = MODEL_MAX_ATTEMPTS,
        backoff: float = MODEL_BACKOFF_S,
    ):
        self.http = http
        self.api_key = api_key
        self.model = model
        self.url = base_url.rstrip("/") + "/chat/completions"
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff = backoff

    @classmethod
    def from_settings(cls, http: httpx.AsyncClient, settings: Settings):
        return cls(
            http,
            api_key=settings.require_openai_key(),
            model=settings.openai_model,
            base_url=settings.openai_base_url,
        )

    def _payload(self, system: str, prompt: str, temperature: float) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": temperature,
        }

    async def complete(self, system: str, prompt: str, temperature: float) -> str:
        """
        Sends one chat completion and returns the assistant message text.
        Raises ModelCallError when no completion could be obtained.
        """
        payload = self._payload(system, prompt, temperature)
        headers = {"Authorization": f"Bearer {self.api_key}"}

        attempt = 0
        while True:
            attempt += 1
            try:
                resp = await self.http.post(
                    self.url, json=payload, headers=headers, timeout=self.timeout
                )
            except TRANSIENT_ERRORS as e:
                if attempt >= self.max_attempts:
                    logging.error(
                        f"OpenAI unreachable after {attempt} attempts: {e!r}"
                    )
                    raise ModelCallError(
                        f"Transient error after {attempt} attempts"
                    ) from e
                logging.warning(
                    f"Transient HTTP error calling OpenAI (attempt {attempt}), retrying: {e!r}"
                )
                await asyncio.sleep(self.backoff * attempt)
                continue
            except httpx.TimeoutException as e:
                logging.error(f"OpenAI call timed out after {self.timeout}s")
                raise ModelCallError("Timed out") from e
            except httpx.TransportError as e:
                logging.error(f"OpenAI call failed: {e!r}")
                raise ModelCallError("Transport error") from e
            break

        if resp.is_error:
            logging.error(f"OpenAI API error: {resp.status_code} {resp.text}")
            raise ModelCallError(
                f"OpenAI returned {resp.status_code}", status_code=resp.status_code
            )

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logging.error(f"Unexpected OpenAI response body: {resp.text[:500]!r}")
            raise ModelCallError("Malformed completion body") from e

        if not isinstance(content, str):
            raise ModelCallError("Completion has no text content")
        return content
