# backend/utils/advisor_client.py
import httpx
import logging
from typing import Optional
from urllib.parse import urljoin
from config import settings

logger = logging.getLogger(__name__)

class AdvisorNotConfigured(Exception):
    pass

class AdvisorClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, api_url: Optional[str] = None):
        # Fall back to the values from the environment
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.api_url = api_url or settings.GEMINI_API_URL

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, prompt: str) -> str:
        # Send a single-turn prompt to the text-generation API
        if not self.configured:
            raise AdvisorNotConfigured("System not configured")

        url = urljoin(self.api_url, f"/v1beta/models/{self.model}:generateContent")
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        body = {"contents": [{"parts": [{"text": prompt}]}]}

        async with httpx.AsyncClient(timeout=30.0) as client:
            try:
                response = await client.post(url, json=body, headers=headers)
                response.raise_for_status()
            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                logger.error(f"Advisor request error: {e}")
                raise

        data = response.json()
        parts = []
        for candidate in data.get("candidates", [])[:1]:
            for part in candidate.get("content", {}).get("parts", []):
                if part.get("text"):
                    parts.append(part["text"])
        return "".join(parts) or "No response generated."

advisor_client = AdvisorClient()
