"""
LeetCode Stats Client - thin proxy over the public alfa-leetcode-api.
"""

import logging

import httpx

from sensai.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class LeetCodeClient:

    def __init__(self, base_url: str = None, timeout: float = None, transport: httpx.BaseTransport = None):
        self.base_url = (base_url or settings.leetcode_api_base).rstrip("/")
        self.timeout = timeout or settings.leetcode_timeout_seconds
        self.transport = transport

    def _get(self, path: str, error_message: str) -> dict:
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = client.get(f"{self.base_url}{path}")
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.warning("LeetCode API error for %s: %s", path, e)
                raise RuntimeError(error_message) from e
            return response.json()

    def solved_stats(self, username: str) -> dict:
        data = self._get(f"/{username}/solved", "Failed to fetch LeetCode data")
        return {
            "totalSolved": data.get("totalSolved"),
            "totalQuestions": data.get("totalQuestions"),
            "easySolved": data.get("easySolved"),
            "mediumSolved": data.get("mediumSolved"),
            "hardSolved": data.get("hardSolved")
        }

    def topic_stats(self, username: str) -> dict:
        data = self._get(f"/skillStats/{username}", "Failed to fetch LeetCode topic stats")
        return {"topics": data.get("data") or []}


def get_leetcode_client() -> LeetCodeClient:
    return LeetCodeClient()
