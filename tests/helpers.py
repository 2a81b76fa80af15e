import json
import threading
from typing import Callable, Dict, List, Optional

import requests


def make_response(body, status_code: int = 200) -> requests.Response:
    """Build a real requests.Response with the given body."""
    resp = requests.Response()
    resp.status_code = status_code
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """Stand-in for requests.Session that answers from handlers and records calls."""

    def __init__(
        self,
        get_handler: Optional[Callable[[str], requests.Response]] = None,
        post_handler: Optional[Callable[[str, Dict[str, str]], requests.Response]] = None,
    ):
        self.get_handler = get_handler
        self.post_handler = post_handler
        self.calls: List[dict] = []
        self._lock = threading.Lock()

    def get(self, url, timeout=None, **kwargs):
        with self._lock:
            self.calls.append({"method": "GET", "url": url, "timeout": timeout})
        return self.get_handler(url)

    def post(self, url, data=None, headers=None, timeout=None, **kwargs):
        form = dict(data or {})
        with self._lock:
            self.calls.append({
                "method": "POST",
                "url": url,
                "data": form,
                "headers": dict(headers or {}),
                "timeout": timeout,
            })
        return self.post_handler(url, form)

    def posts(self) -> List[dict]:
        return [c for c in self.calls if c["method"] == "POST"]


class ClosingSession(FakeSession):
    """FakeSession that tracks whether it was closed, for session-lifecycle checks."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.closed = False

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def session_factory(get_handler=None, post_handler=None):
    """Replacement for requests.Session that remembers every instance it builds."""
    created: List[ClosingSession] = []

    def factory():
        session = ClosingSession(get_handler=get_handler, post_handler=post_handler)
        created.append(session)
        return session

    factory.created = created
    return factory
