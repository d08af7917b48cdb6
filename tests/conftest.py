"""Shared fixtures: every test starts with a fresh, unfrozen default toggle."""

from __future__ import annotations

import pytest

from mp_redact.config.settings import DISABLE_REDACTION_ENV, EnvSettingsLoader
from mp_redact.toggle import RedactionToggle, state


@pytest.fixture(autouse=True)
def fresh_default_toggle(monkeypatch: pytest.MonkeyPatch) -> RedactionToggle:
    monkeypatch.delenv(DISABLE_REDACTION_ENV, raising=False)
    toggle = RedactionToggle(settings_loader=EnvSettingsLoader(environ={}))
    monkeypatch.setattr(state, "_default_toggle", toggle)
    return toggle
