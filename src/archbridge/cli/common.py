"""Shared CLI formatting helpers."""

from __future__ import annotations


def plural(count: int, singular: str, plural_form: str | None = None) -> str:
    word = singular if count == 1 else (plural_form or f"{singular}s")
    return f"{count} {word}"


def format_type_breakdown(*, epics: int, features: int, user_stories: int) -> str:
    parts: list[str] = []
    if epics:
        parts.append(plural(epics, "epic"))
    if features:
        parts.append(plural(features, "feature"))
    if user_stories:
        parts.append(plural(user_stories, "user story", "user stories"))
    return ", ".join(parts) if parts else "none"
