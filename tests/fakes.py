# =============================================================================
# tests/fakes.py - Test Doubles
# =============================================================================
# Response shapes of the OpenAI SDK and a scripted httpx transport for the
# Polar and Resend clients.
# =============================================================================

import json
from types import SimpleNamespace

import httpx


def make_completion(content):
    """Chat completion shaped like the OpenAI SDK response."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_image_result(b64_json=None, url=None):
    """Image edit result shaped like the OpenAI SDK response."""
    return SimpleNamespace(data=[SimpleNamespace(b64_json=b64_json, url=url)])


class ScriptedTransport:
    """
    httpx.MockTransport driven by (method, path) -> response(s).

    A list of responses is consumed one per call; the last one repeats.
    Every request is recorded in `requests`.
    """

    def __init__(self, routes: dict):
        self.routes = {key: list(value) if isinstance(value, list) else [value] for key, value in routes.items()}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"detail": "Not Found"})

        queue = self.routes[key]
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        # Fresh copy so a repeated response is never reused by two clients
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> dict:
        return json.loads(request.content)


async def no_sleep(seconds):
    """Replacement for asyncio.sleep that returns immediately."""
    return None


class RecordingSleep:
    """Replacement for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)
