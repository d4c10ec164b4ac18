from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .generate import GenerationRequest, RequestKind, SuggestionGenerator
from .log import get_logger
from .render import RenderedView, StatusBanner, render_result
from .settings import Settings, settings as default_settings
from .storage import SharedState, SharedStore, save_tone

logger = get_logger(__name__)

NO_POST_SELECTED = 'No post selected. Go to LinkedIn and click "✨ AI Reply" on a post.'


@dataclass
class TopicState:
    length: int
    over_limit: bool
    can_submit: bool


class PopupSession:
    """
    Popup-side glue: reads the shared store, runs the generator, renders.

    One session per opened popup. Suggestions and the post draft are kept so
    reopening a tab does not trigger a second generation.
    """

    def __init__(self, store: SharedStore, generator: SuggestionGenerator, cfg: Optional[Settings] = None):
        self.store = store
        self.generator = generator
        self.settings = cfg or default_settings
        self.tone = self.settings.DEFAULT_TONE
        self.post_text: Optional[str] = None
        self.comment_view: Optional[RenderedView] = None
        self.post_view: Optional[RenderedView] = None

    @property
    def post_text_display(self) -> str:
        return self.post_text or NO_POST_SELECTED

    def load(self) -> SharedState:
        state = SharedState.load(self.store)
        if state.user_tone:
            self.tone = state.user_tone
        self.post_text = state.active_post_text or None
        return state

    def initialize(self) -> Optional[RenderedView]:
        """Load stored state; generate comments right away if a post is waiting."""
        self.load()
        if self.post_text and self.comment_view is None:
            return self.generate_comments()
        return None

    def set_tone(self, tone: str):
        self.tone = tone
        save_tone(self.store, tone)

    def topic_state(self, topic: str) -> TopicState:
        length = len(topic)
        over = length > self.settings.MAX_POST_CHARS
        return TopicState(length=length, over_limit=over, can_submit=0 < len(topic.strip()) and not over)

    def generate_comments(self) -> RenderedView:
        text = self.post_text or ""
        if len(text) < self.settings.MIN_POST_TEXT_CHARS:
            return RenderedView(
                status=StatusBanner('Please click the "✨ AI Reply" button on a LinkedIn post first.', is_error=True)
            )
        result = self.generator.generate(GenerationRequest(kind=RequestKind.COMMENT, input=text, tone=self.tone))
        self.comment_view = render_result(result)
        return self.comment_view

    def generate_post(self, topic: str) -> RenderedView:
        topic = topic.strip()
        if not topic:
            return RenderedView(status=StatusBanner("Please enter a topic for your post.", is_error=True))
        result = self.generator.generate(GenerationRequest(kind=RequestKind.POST, input=topic, tone=self.tone))
        self.post_view = render_result(result)
        return self.post_view
