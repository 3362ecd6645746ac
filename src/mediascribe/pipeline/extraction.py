"""Recovering the structured payload from free-form generated text."""

from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable


@runtime_checkable
class ResponseExtractor(Protocol):
    """Derives the primary artifact from the raw response. Must not raise."""

    def extract(self, raw_text: str) -> str: ...


class BraceSpanExtractor:
    """Keep the span from the first ``{`` to the last ``}``.

    Models often wrap a JSON answer in prose or code fences; this recovers the
    payload without validating it. Text without a well-ordered brace pair is
    returned unchanged, so plain-text answers pass through.
    """

    def extract(self, raw_text: str) -> str:
        first = raw_text.find("{")
        last = raw_text.rfind("}")
        if first == -1 or last == -1 or first > last:
            return raw_text
        return raw_text[first : last + 1].strip()


class PassthroughExtractor:
    """Use the raw response as the primary artifact."""

    def extract(self, raw_text: str) -> str:
        return raw_text


def get_extractor(mode: Literal["brace_span", "none"]) -> ResponseExtractor:
    if mode == "none":
        return PassthroughExtractor()
    return BraceSpanExtractor()
