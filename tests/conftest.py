import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


REFRESH_TOKEN = "aor" + "A1b2_C3-d4" * 6 + ":" + "Zx9+/Yw8=" * 7
OIDC_URL = "https://oidc.us-east-1.amazonaws.com/token"
SOCIAL_URL = "https://prod.us-east-1.auth.desktop.kiro.dev/refreshToken"
USAGE_URL = "https://q.us-east-1.amazonaws.com/getUsageLimits"


class HttpStub:
    """Serves canned responses by (method, url) and records every request."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        url: str,
        status_code: int = 200,
        json: Any = None,
        text: Optional[str] = None,
        exc: Optional[Exception] = None,
    ) -> None:
        self.routes[(method, url)] = {
            "status_code": status_code,
            "json": json,
            "text": text,
            "exc": exc,
        }

    def calls_to(self, url: str) -> List[httpx.Request]:
        return [request for request in self.requests if str(request.url) == url]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, str(request.url)))
        if route is None:
            raise httpx.ConnectError(f"No stubbed route for {request.url}", request=request)
        if route["exc"] is not None:
            raise route["exc"]
        if route["text"] is not None:
            return httpx.Response(route["status_code"], text=route["text"])
        return httpx.Response(route["status_code"], json=route["json"])

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))


@pytest.fixture
def http_stub() -> HttpStub:
    return HttpStub()
