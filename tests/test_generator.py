# ===============================================
# SuggestionGenerator: request in, typed result out
# ===============================================

import threading
import time

import requests

from conftest import reply
from replypilot.generate import (
    Failure,
    FailureKind,
    GenerationRequest,
    PostDraft,
    RequestKind,
    Suggestions,
    TriggerGuard,
)
from replypilot.generate.errors import TriggerBusyError

POST_TEXT = "AI is changing how teams collaborate."
SUGGESTIONS = [
    "Interesting point — how are you measuring collaboration gains?",
    "This mirrors what we've seen in distributed teams.",
    "Curious if this holds for async-first orgs too.",
]


def comment(text=POST_TEXT, tone="analytical"):
    return GenerationRequest(kind=RequestKind.COMMENT, input=text, tone=tone)


def post(topic="Remote onboarding", tone="friendly"):
    return GenerationRequest(kind=RequestKind.POST, input=topic, tone=tone)


def test_end_to_end_comment_scenario(make_generator):
    gen, client = make_generator(reply(suggestions=SUGGESTIONS))
    out = gen.generate(comment())

    assert out == Suggestions(SUGGESTIONS)
    assert len(client.calls) == 1
    payload, params = client.calls[0]
    assert payload.schema.kind == RequestKind.COMMENT
    assert payload.schema.to_gemini()["properties"]["suggestions"]["items"] == {"type": "STRING"}
    assert POST_TEXT in payload.user_query
    assert "analytical" in payload.system_instruction
    # per-kind override from config.yaml
    assert params.temperature == 0.8


def test_transport_failure_after_all_retries(make_generator, sleeps):
    gen, client = make_generator(requests.ConnectionError("offline"))
    out = gen.generate(comment())
    assert isinstance(out, Failure)
    assert out.kind == FailureKind.TRANSPORT
    assert "offline" in out.message
    assert len(client.calls) == 3
    assert sleeps == [1.0, 2.0]


def test_transient_failure_recovers(make_generator, sleeps):
    gen, client = make_generator(requests.HTTPError("503"), reply(suggestions=["only one"]))
    assert gen.generate(comment()) == Suggestions(["only one"])
    assert len(client.calls) == 2
    assert sleeps == [1.0]


def test_missing_envelope_text_is_parse_failure_without_retry(make_generator, sleeps):
    gen, client = make_generator(None)
    out = gen.generate(comment())
    assert out.kind == FailureKind.PARSE
    assert len(client.calls) == 1
    assert sleeps == []


def test_non_json_text_is_parse_failure(make_generator):
    gen, _ = make_generator("Sure! Here are three comments:")
    assert gen.generate(comment()).kind == FailureKind.PARSE


def test_empty_object_is_validation_failure(make_generator):
    gen, _ = make_generator("{}")
    out = gen.generate(comment())
    assert out.kind == FailureKind.VALIDATION
    assert "suggestions" in out.message


def test_two_suggestions_are_rendered_as_is(make_generator):
    gen, _ = make_generator(reply(suggestions=["a", "b"]))
    assert gen.generate(comment()) == Suggestions(["a", "b"])


def test_post_draft(make_generator):
    gen, client = make_generator(reply(output="Onboarding remotely? Start with a buddy. What worked for you?"))
    out = gen.generate(post())
    assert isinstance(out, PostDraft)
    assert out.over_limit is False
    payload, params = client.calls[0]
    assert payload.schema.field_name == "output"
    assert params.max_tokens == 400


def test_over_length_post_is_success_with_advisory(make_generator):
    gen, _ = make_generator(reply(output="y" * 301))
    out = gen.generate(post())
    assert isinstance(out, PostDraft)
    assert out.over_limit is True
    assert len(out.text) == 301


def test_input_checks_happen_before_any_call(make_generator):
    gen, client = make_generator(reply(suggestions=["a"]))
    assert gen.generate(comment(text="   ")).kind == FailureKind.INPUT
    assert gen.generate(comment(text="Nice")).kind == FailureKind.INPUT
    assert gen.generate(post(topic="t" * 301)).kind == FailureKind.INPUT
    assert client.calls == []


def test_guard_released_after_every_outcome(make_generator):
    gen, _ = make_generator(requests.Timeout("slow"))
    gen.generate(comment())
    assert gen.guard.is_enabled(RequestKind.COMMENT)

    gen, _ = make_generator("{}")
    gen.generate(comment())
    assert gen.guard.is_enabled(RequestKind.COMMENT)


def test_guard_held_during_call_blocks_same_kind_only(make_generator):
    seen = {}

    def reenter(payload):
        if "nested" in seen:
            return
        seen["nested"] = True
        seen["enabled"] = gen.guard.is_enabled(RequestKind.COMMENT)
        seen["same"] = gen.generate(comment())
        seen["other"] = gen.generate(post())

    gen, _ = make_generator(reply(suggestions=["a"]), on_call=reenter)
    first = gen.generate(comment())

    assert first == Suggestions(["a"])
    assert seen["enabled"] is False
    assert seen["same"].kind == FailureKind.BUSY
    # post generation shares no lock with comments; the scripted reply has no
    # "output" so it fails validation, but it did run
    assert seen["other"].kind == FailureKind.VALIDATION
    assert gen.guard.is_enabled(RequestKind.COMMENT)
    assert gen.guard.is_enabled(RequestKind.POST)


def test_guard_listeners_see_disable_and_enable(make_generator):
    gen, _ = make_generator(reply(suggestions=["a"]))
    events = []
    gen.guard.subscribe(lambda kind, enabled: events.append((kind, enabled)))
    gen.generate(comment())
    assert events == [(RequestKind.COMMENT, False), (RequestKind.COMMENT, True)]


def test_guard_admits_one_thread_per_kind():
    guard = TriggerGuard()
    workers = 16
    start = threading.Barrier(workers)
    release = threading.Event()
    outcomes = []

    def worker():
        start.wait()
        try:
            with guard.busy(RequestKind.COMMENT):
                outcomes.append("entered")
                release.wait(timeout=5)
        except TriggerBusyError:
            outcomes.append("busy")

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for t in threads:
        t.start()
    deadline = time.monotonic() + 5
    while len(outcomes) < workers and time.monotonic() < deadline:
        time.sleep(0.01)
    release.set()
    for t in threads:
        t.join(timeout=5)

    assert outcomes.count("entered") == 1
    assert outcomes.count("busy") == workers - 1
    assert guard.is_enabled(RequestKind.COMMENT)
