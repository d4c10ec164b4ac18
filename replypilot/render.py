"""Turn generation results into what the popup displays."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import List, Optional

from .generate.types import Failure, GenerationResult, PostDraft, Suggestions

ERROR_PANEL = (
    "Error generating content. The AI service may be unavailable "
    "or the response format was invalid."
)
STATUS_TTL_SECONDS = 5.0


@dataclass
class SuggestionCard:
    text: str

    @property
    def html(self) -> str:
        body = html.escape(self.text).replace("\n", "<br>")
        data = html.escape(self.text, quote=True)
        return (
            '<div class="suggestion-card">'
            f"<p>{body}</p>"
            f'<button class="copy-button" data-text="{data}" title="Copy to Clipboard">Copy</button>'
            "</div>"
        )


@dataclass
class StatusBanner:
    message: str
    is_error: bool = False
    ttl_seconds: float = STATUS_TTL_SECONDS


@dataclass
class RenderedView:
    cards: List[SuggestionCard] = field(default_factory=list)
    alert: Optional[str] = None
    status: Optional[StatusBanner] = None

    @property
    def ok(self) -> bool:
        return self.alert is None

    @property
    def html(self) -> str:
        if self.alert is not None:
            return f'<div class="alert-box">{html.escape(self.alert)}</div>'
        return "".join(card.html for card in self.cards)


def render_result(result: GenerationResult) -> RenderedView:
    if isinstance(result, Suggestions):
        return RenderedView(cards=[SuggestionCard(text) for text in result.items])
    if isinstance(result, PostDraft):
        status = None
        if result.over_limit:
            status = StatusBanner(
                f"Warning: Generated post is {len(result.text)} characters "
                f"(over {result.max_chars} limit). Please shorten it manually.",
                is_error=True,
            )
        return RenderedView(cards=[SuggestionCard(result.text)], status=status)
    if isinstance(result, Failure):
        return RenderedView(alert=ERROR_PANEL, status=StatusBanner("Generation failed.", is_error=True))
    raise TypeError(f"Unknown result type: {type(result).__name__}")


def copy_status(ok: bool) -> StatusBanner:
    if ok:
        return StatusBanner("Copied to clipboard! Ready to paste.")
    return StatusBanner("Failed to copy. Please select and copy manually.", is_error=True)
