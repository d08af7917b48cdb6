"""Unit tests for the redaction engine."""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from mp_redact.config.settings import EnvSettingsLoader
from mp_redact.engine import (
    MAX_PARTIAL_EXPOSE,
    MIN_PARTIAL_CHARS,
    Specialization,
    redact,
    redact_full,
    redact_partial,
)
from mp_redact.policy import RedactionPolicy, RedactionStyle
from mp_redact.toggle import RedactionToggle

REDACTING = RedactionToggle(settings_loader=EnvSettingsLoader(environ={}))
PLAINTEXT = RedactionToggle(settings_loader=EnvSettingsLoader(environ={}))
PLAINTEXT.disable()

FULL = RedactionPolicy.full()
PARTIAL = RedactionPolicy.partial()
PARTIAL_X = RedactionPolicy.partial(RedactionStyle.char("X"))
OPTION = Specialization.OPTION

# The autouse toggle fixture is function-scoped but never mutated by these tests.
property_settings = settings(suppress_health_check=[HealthCheck.function_scoped_fixture])


def _alnum_count(text: str) -> int:
    return sum(1 for char in text if char.isalnum())


# ---------------------------------------------------------------------------
# Full redaction
# ---------------------------------------------------------------------------


class TestFullRedaction:
    def test_replaces_alphanumerics_only(self) -> None:
        assert redact("Hello, world!", FULL, toggle=REDACTING) == "*****, *****!"

    def test_custom_char(self) -> None:
        policy = RedactionPolicy.full(RedactionStyle.char("#"))
        assert redact("a-1", policy, toggle=REDACTING) == "#-#"

    def test_default_policy(self) -> None:
        assert redact("secret", toggle=REDACTING) == "******"

    def test_empty_string(self) -> None:
        assert redact("", FULL, toggle=REDACTING) == ""

    def test_non_ascii_letters_are_alphanumeric(self) -> None:
        assert redact("Zoë 42", FULL, toggle=REDACTING) == "*** **"

    def test_str_style_outside_fixed_uses_asterisks(self) -> None:
        policy = RedactionPolicy.full(RedactionStyle.string("[hidden]"))
        assert redact("abc", policy, toggle=REDACTING) == "***"

    def test_helper(self) -> None:
        assert redact_full("a b", "X") == "X X"

    @property_settings
    @given(st.text())
    def test_idempotent(self, text: str) -> None:
        once = redact(text, FULL, toggle=REDACTING)
        assert redact(once, FULL, toggle=REDACTING) == once

    @property_settings
    @given(st.text())
    def test_length_preserved(self, text: str) -> None:
        assert len(redact(text, FULL, toggle=REDACTING)) == len(text)


# ---------------------------------------------------------------------------
# Partial redaction
# ---------------------------------------------------------------------------


class TestPartialRedaction:
    def test_hello_world(self) -> None:
        assert redact("Hello, world!", PARTIAL_X, toggle=REDACTING) == "HelXX, XXrld!"

    def test_email(self) -> None:
        assert redact("john.doe@prima.it", PARTIAL_X, toggle=REDACTING) == "johX.XXX@XXXXa.it"

    def test_goodbye_world(self) -> None:
        assert redact("Goodbye, world!", PARTIAL_X, toggle=REDACTING) == "GooXXXX, XXrld!"

    def test_exposure_scales_below_cap(self) -> None:
        # 5 alphanumerics expose 1 at each end
        assert redact("abcde", PARTIAL, toggle=REDACTING) == "a***e"
        # 6 alphanumerics expose 2 at each end
        assert redact("abcdef", PARTIAL, toggle=REDACTING) == "ab**ef"

    def test_exposure_capped(self) -> None:
        assert redact("abcdefghijklmnop", PARTIAL, toggle=REDACTING) == "abc**********nop"

    def test_short_text_fully_redacted(self) -> None:
        assert redact("Doe", PARTIAL, toggle=REDACTING) == "***"
        assert redact("ab-cd", PARTIAL, toggle=REDACTING) == "**-**"

    def test_helper(self) -> None:
        assert redact_partial("abcdefghi") == "abc***ghi"

    def test_constants(self) -> None:
        assert MIN_PARTIAL_CHARS == 5
        assert MAX_PARTIAL_EXPOSE == 3

    @property_settings
    @given(st.text().filter(lambda s: _alnum_count(s) < MIN_PARTIAL_CHARS))
    def test_short_text_matches_full(self, text: str) -> None:
        assert redact(text, PARTIAL, toggle=REDACTING) == redact(text, FULL, toggle=REDACTING)

    @property_settings
    @given(st.text())
    def test_non_alphanumerics_untouched(self, text: str) -> None:
        result = redact(text, PARTIAL_X, toggle=REDACTING)
        assert len(result) == len(text)
        for original, redacted in zip(text, result):
            if not original.isalnum():
                assert redacted == original

    @property_settings
    @given(st.text(alphabet=st.characters(categories=["Ll", "Lu", "Nd"]), min_size=5))
    def test_exposed_counts(self, text: str) -> None:
        result = redact(text, PARTIAL_X, toggle=REDACTING)
        expose = min(len(text) // 3, MAX_PARTIAL_EXPOSE)
        assert result[:expose] == text[:expose]
        assert result[len(text) - expose :] == text[len(text) - expose :]
        assert set(result[expose : len(text) - expose]) <= {"X"}


# ---------------------------------------------------------------------------
# Fixed redaction
# ---------------------------------------------------------------------------


class TestFixedRedaction:
    def test_asterisks(self) -> None:
        assert redact("4111 1111 1111 1111", RedactionPolicy.fixed(3), toggle=REDACTING) == "***"

    def test_char(self) -> None:
        policy = RedactionPolicy.fixed(5, RedactionStyle.char("#"))
        assert redact("", policy, toggle=REDACTING) == "#####"

    def test_str_emitted_verbatim(self) -> None:
        policy = RedactionPolicy.fixed(3, RedactionStyle.string("[REDACTED]"))
        assert redact("secret", policy, toggle=REDACTING) == "[REDACTED]"

    def test_ignores_option_specialization(self) -> None:
        assert redact("Some('x')", RedactionPolicy.fixed(2), OPTION, toggle=REDACTING) == "**"

    @property_settings
    @given(st.text(), st.integers(min_value=1, max_value=64))
    def test_independent_of_input(self, text: str, width: int) -> None:
        assert redact(text, RedactionPolicy.fixed(width), toggle=REDACTING) == "*" * width


# ---------------------------------------------------------------------------
# Option specialization
# ---------------------------------------------------------------------------


class TestOptionSpecialization:
    def test_none_passes_through(self) -> None:
        assert redact("None", PARTIAL, OPTION, toggle=REDACTING) == "None"

    def test_some_redacts_inner_only(self) -> None:
        assert redact("Some(Doe)", PARTIAL, OPTION, toggle=REDACTING) == "Some(***)"

    def test_some_with_partial_inner(self) -> None:
        assert redact("Some('Jane Doe')", PARTIAL, OPTION, toggle=REDACTING) == "Some('Ja** *oe')"

    def test_unrecognised_shape_falls_back_to_full(self) -> None:
        assert redact("Nobody", PARTIAL, OPTION, toggle=REDACTING) == "******"

    def test_empty_some_keeps_wrapper(self) -> None:
        assert redact("Some()", PARTIAL, OPTION, toggle=REDACTING) == "Some()"

    def test_none_without_specialization_is_redacted(self) -> None:
        assert redact("None", FULL, toggle=REDACTING) == "****"


# ---------------------------------------------------------------------------
# Toggle interaction
# ---------------------------------------------------------------------------


class TestToggleInteraction:
    def test_plaintext_returns_input(self) -> None:
        assert redact("john.doe@prima.it", PARTIAL_X, toggle=PLAINTEXT) == "john.doe@prima.it"
        assert redact("secret", RedactionPolicy.fixed(3), toggle=PLAINTEXT) == "secret"

    def test_uses_default_toggle(self, fresh_default_toggle: RedactionToggle) -> None:
        assert redact("abc", FULL) == "***"
        assert fresh_default_toggle.is_frozen

    def test_default_toggle_disabled(self, fresh_default_toggle: RedactionToggle) -> None:
        fresh_default_toggle.disable().unwrap()
        assert redact("abc", FULL) == "abc"

    def test_disable_after_read_changes_nothing(self, fresh_default_toggle: RedactionToggle) -> None:
        assert redact("abc", FULL) == "***"
        assert fresh_default_toggle.disable().is_err()
        assert redact("abc", FULL) == "***"
