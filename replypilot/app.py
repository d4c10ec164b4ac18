# ============================================================
# Reply Pilot FastAPI App
# ------------------------------------------------------------
# Popup backend:
#   - comment suggestions from the stored post text
#   - post draft from a typed topic
#   - tone preference + shared state read-out
# Model client: Gemini, OpenAI, Ollama or Echo (see settings)
# ============================================================

from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

# --- Local imports ---
from replypilot.settings import settings
from replypilot.log import get_logger
from replypilot.generate import SuggestionGenerator, build_model_client
from replypilot.popup import PopupSession
from replypilot.render import RenderedView
from replypilot.storage import SharedState, SharedStore

logger = get_logger(__name__)

# ------------------------------------------------------------
# 🔧 Shared resources (overridable in tests)
# ------------------------------------------------------------
@lru_cache(maxsize=1)
def get_store() -> SharedStore:
    return SharedStore(settings.STORE_PATH)


@lru_cache(maxsize=1)
def get_generator() -> SuggestionGenerator:
    return SuggestionGenerator(model_client=build_model_client(settings))


def get_session(
    store: SharedStore = Depends(get_store),
    generator: SuggestionGenerator = Depends(get_generator),
) -> PopupSession:
    session = PopupSession(store=store, generator=generator)
    session.load()
    return session

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="Reply Pilot API", version="0.3")

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class CommentRequest(BaseModel):
    text: Optional[str] = None   # falls back to the stored post text
    tone: Optional[str] = None

class PostRequest(BaseModel):
    topic: str
    tone: Optional[str] = None

class ToneUpdate(BaseModel):
    tone: str = Field(min_length=1)

class Status(BaseModel):
    message: str
    is_error: bool
    ttl_seconds: float

class ViewPayload(BaseModel):
    ok: bool
    cards: List[str]
    alert: Optional[str] = None
    status: Optional[Status] = None
    html: str
    meta: Dict[str, Any]


def _to_payload(view: RenderedView, session: PopupSession) -> ViewPayload:
    return ViewPayload(
        ok=view.ok and bool(view.cards),
        cards=[c.text for c in view.cards],
        alert=view.alert,
        status=Status(**vars(view.status)) if view.status else None,
        html=view.html,
        meta={
            "tone": session.tone,
            "engine": type(session.generator.model_client).__name__,
            "model": getattr(session.generator.model_client, "model", None),
        },
    )

# ------------------------------------------------------------
# 💬 Generation routes
# ------------------------------------------------------------
@app.post("/generate/comments", response_model=ViewPayload)
def generate_comments(req: CommentRequest, session: PopupSession = Depends(get_session)):
    if req.tone:
        session.tone = req.tone
    if req.text is not None:
        session.post_text = req.text
    try:
        view = session.generate_comments()
    except Exception as e:
        logger.exception("Comment generation crashed")
        raise HTTPException(status_code=500, detail=str(e))
    return _to_payload(view, session)


@app.post("/generate/post", response_model=ViewPayload)
def generate_post(req: PostRequest, session: PopupSession = Depends(get_session)):
    if req.tone:
        session.tone = req.tone
    try:
        view = session.generate_post(req.topic)
    except Exception as e:
        logger.exception("Post generation crashed")
        raise HTTPException(status_code=500, detail=str(e))
    return _to_payload(view, session)

# ------------------------------------------------------------
# 🎚️ Tone + shared state
# ------------------------------------------------------------
@app.get("/tone")
def get_tone(store: SharedStore = Depends(get_store)):
    return {"tone": SharedState.load(store).user_tone or settings.DEFAULT_TONE}


@app.put("/tone")
def put_tone(update: ToneUpdate, session: PopupSession = Depends(get_session)):
    session.set_tone(update.tone)
    return {"tone": update.tone}


@app.get("/state")
def get_state(session: PopupSession = Depends(get_session)):
    state = SharedState.load(session.store)
    return {
        "postText": session.post_text_display,
        "hasPost": bool(state.active_post_text),
        "requestedAt": state.requested_at,
        "tone": session.tone,
    }

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}


@app.get("/")
def hello():
    return {"message": f"{settings.app_name} service running."}
