# Host page selectors and the markers used for injected triggers.
# If the feed markup changes these stop matching and nothing is injected.

POST_SELECTOR = ".feed-shared-update-v2"
INTERACTION_BAR_SELECTOR = ".feed-shared-social-actions"
TEXT_SELECTOR = ".feed-shared-update-v2__description-wrapper, .update-components-text"

BUTTON_CLASS = "ai-reply-button-injected"
BUTTON_LABEL = "✨ AI Reply"
MARKER_ATTR = "data-ai-reply-injected"
