"""Shared test fixtures and configuration."""

import json
import subprocess
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Optional
from unittest.mock import MagicMock

import httpx
import pytest

from gitmessage.pipeline import ConfigSource, MessageSink, Notifier, SinkUnavailableError


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_repo_root(temp_dir):
    """Create a mock git repository root directory."""
    git_dir = temp_dir / ".git"
    git_dir.mkdir()
    return temp_dir


@pytest.fixture
def sample_diff():
    """Staged diff of a one-line change to a.ts."""
    return """diff --git a/a.ts b/a.ts
index 1234567..abcdefg 100644
--- a/a.ts
+++ b/a.ts
@@ -1 +1 @@
-export const a = 1;
+export const a = 2;"""


@pytest.fixture
def fake_git(mocker):
    """Patch subprocess.run with a table of git responses.

    Keys are the git argument tuples (without the leading "git"). Values are
    the stdout string, or an exception instance to raise. Commands missing
    from the table fail like a git error.
    """
    responses = {}
    calls = []

    def run(cmd, **kwargs):
        args = tuple(cmd[1:])
        calls.append(args)
        if args not in responses:
            raise subprocess.CalledProcessError(
                1, cmd, stderr=f"fatal: unexpected command: git {' '.join(args)}"
            )
        response = responses[args]
        if isinstance(response, BaseException):
            raise response
        result = MagicMock()
        result.stdout = response
        result.returncode = 0
        return result

    mocker.patch("subprocess.run", side_effect=run)
    return SimpleNamespace(responses=responses, calls=calls)


@pytest.fixture
def staged_and_untracked(fake_git, mock_repo_root, sample_diff):
    """Working tree with a staged a.ts and an untracked b.ts."""
    (mock_repo_root / "a.ts").write_text("export const a = 2;\n")
    (mock_repo_root / "b.ts").write_text("export const b = 1;\n")
    fake_git.responses.update({
        ("rev-parse", "--show-toplevel"): f"{mock_repo_root}\n",
        ("status", "--porcelain=v1", "--untracked-files=all"): "M  a.ts\n?? b.ts\n",
        ("ls-files", "--error-unmatch", "--", "a.ts"): "a.ts\n",
        ("diff", "--staged", "--name-only"): "a.ts\n",
        ("diff", "--staged"): sample_diff + "\n",
    })
    return fake_git


def agent_response(content: str, status_code: int = 200, usage: Optional[dict] = None) -> httpx.Response:
    """Build an agents completion response."""
    body = {
        "id": "cmpl-1",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }
    if usage is not None:
        body["usage"] = usage
    return httpx.Response(status_code, json=body)


@pytest.fixture
def agent_endpoint():
    """Mock agents endpoint recording requests.

    Set ``endpoint.handler`` to change the response. ``endpoint.client()``
    returns an httpx.Client routed to the mock.
    """
    endpoint = SimpleNamespace(requests=[], handler=lambda request: agent_response("fix: update a"))

    def dispatch(request: httpx.Request) -> httpx.Response:
        endpoint.requests.append(request)
        return endpoint.handler(request)

    endpoint.client = lambda: httpx.Client(transport=httpx.MockTransport(dispatch))
    endpoint.bodies = lambda: [json.loads(r.content) for r in endpoint.requests]
    return endpoint


class StaticConfigSource(ConfigSource):
    def __init__(self, api_key):
        self.api_key = api_key

    def get_credential(self):
        return self.api_key


class RecordingSink(MessageSink):
    def __init__(self, available: bool = True):
        self.available = available
        self.messages = []

    def publish(self, text):
        if not self.available:
            raise SinkUnavailableError("Could not find SCM input box.")
        self.messages.append(text)


class RecordingNotifier(Notifier):
    def __init__(self):
        self.infos = []
        self.errors = []

    def info(self, text):
        self.infos.append(text)

    def error(self, text, remedy=None):
        self.errors.append((text, remedy))


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def notifier():
    return RecordingNotifier()
