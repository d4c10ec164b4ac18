# ===============================================
# Shared fixtures: settings without .env, scripted
# model clients, an in-memory store, a feed page.
# ===============================================

import json

import pytest

from replypilot.generate import SuggestionGenerator
from replypilot.settings import Settings
from replypilot.storage import SharedStore


class ScriptedClient:
    """Model client that replays a list of replies; exceptions are raised."""

    def __init__(self, replies, on_call=None):
        self.replies = list(replies)
        self.calls = []
        self.on_call = on_call
        self.model = "scripted"

    def generate(self, payload, params):
        self.calls.append((payload, params))
        if self.on_call:
            self.on_call(payload)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply, {"engine": "scripted"}


def reply(**fields) -> str:
    return json.dumps(fields)


@pytest.fixture
def cfg():
    return Settings(_env_file=None, GEMINI_API_KEY=None, OPENAI_API_KEY=None, USE_OLLAMA=False)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def make_generator(cfg, sleeps):
    def _make(*replies, on_call=None):
        client = ScriptedClient(replies, on_call=on_call)
        gen = SuggestionGenerator(model_client=client, cfg=cfg, sleep=sleeps.append)
        return gen, client
    return _make


@pytest.fixture
def store():
    s = SharedStore(":memory:")
    yield s
    s.close()


FEED_HTML = """
<html><body>
<div class="scaffold-finite-scroll">
  <div class="feed-shared-update-v2" id="p1">
    <div class="feed-shared-update-v2__description-wrapper">
      <span class="update-components-text">AI is changing how teams collaborate.</span>
    </div>
    <div class="feed-shared-social-actions">
      <button>Like</button><button>Comment</button><button>Share</button>
    </div>
  </div>
  <div class="feed-shared-update-v2" id="p2">
    <div class="update-components-text">Hiring for two backend roles.</div>
    <div class="update-components-text">DM me if interested.</div>
    <div class="feed-shared-social-actions"></div>
  </div>
</div>
</body></html>
"""

POST_HTML = """
<div class="feed-shared-update-v2" id="{id}">
  <div class="update-components-text">{text}</div>
  <div class="feed-shared-social-actions"><button>Like</button><button>Share</button></div>
</div>
"""


@pytest.fixture
def feed_html():
    return FEED_HTML


@pytest.fixture
def post_html():
    return lambda id="p9", text="Fresh post from the network.": POST_HTML.format(id=id, text=text)
