"""Client for the chat endpoint used by AI nodes.

reply = await ChatClient("http://localhost:8000/api/chat").complete("Hello model")
"""

from __future__ import annotations

import httpx

from flowboard.errors import ChatClientError


class ChatClient:
    """POSTs a prompt as JSON and reads the ``reply`` field of the response."""

    def __init__(
        self,
        url: str = "http://localhost:8000/api/chat",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            url: Full URL of the chat endpoint
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport, used to stub the endpoint
        """
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def complete(self, prompt: str) -> str:
        """Send a prompt and return the model's reply text.

        Raises:
            ChatClientError: on transport errors, non-2xx statuses or a body
                that is not JSON.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json={"prompt": prompt})
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ChatClientError(
                f"Chat endpoint returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ChatClientError(f"Failed to reach chat endpoint at {self.url}: {e}") from e
        except ValueError as e:
            raise ChatClientError(f"Chat endpoint returned invalid JSON: {e}") from e

        reply = data.get("reply") if isinstance(data, dict) else None
        return reply if reply is not None else ""
