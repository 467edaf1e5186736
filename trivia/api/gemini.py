import json
import os

import httpx

from trivia.config import GameConfig
from trivia.quiz.domain.ports import ITextGenerator
from trivia.shared.telemetry import Telemetry


class GenerationError(Exception):
    """The generative provider could not produce text."""


class GeminiTextGenerator(ITextGenerator):
    """
    Streams a completion from the Gemini REST API and joins the chunks.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = GameConfig.GEMINI_MODEL,
        base_url: str = GameConfig.GEMINI_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else os.getenv("GEMINI_API_KEY", "")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.telemetry = Telemetry("GeminiTextGenerator")

    @staticmethod
    def chunk_text(event: dict) -> str:
        texts = []
        for candidate in event.get("candidates") or []:
            parts = (candidate.get("content") or {}).get("parts") or []
            texts.extend(
                str(p["text"]) for p in parts if isinstance(p, dict) and "text" in p
            )
        return "".join(texts)

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise GenerationError("GEMINI_API_KEY is not set")

        url = f"{self.base_url}/models/{self.model}:streamGenerateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        full_text = ""

        async with httpx.AsyncClient(timeout=120, transport=self.transport) as client:
            async with client.stream(
                "POST",
                url,
                params={"alt": "sse", "key": self.api_key},
                json=payload,
            ) as r:
                if r.status_code >= 400:
                    body = (await r.aread()).decode("utf-8", "replace")[:500]
                    raise GenerationError(f"Gemini error ({r.status_code}): {body}")

                async for line in r.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    data = line[len("data:"):].strip()
                    if not data:
                        continue
                    try:
                        chunk = self.chunk_text(json.loads(data))
                    except json.JSONDecodeError as e:
                        raise GenerationError(f"bad stream chunk: {e}") from e
                    self.telemetry.logger.debug(f"Chunk received: {chunk!r}")
                    full_text += chunk

        self.telemetry.log_info("Generation complete", chars=len(full_text))
        return full_text
