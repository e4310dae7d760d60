"""
Tests for the Change Classifier.

Property-based tests (Hypothesis) for the normalization/containment rule,
plus the decision table for text and readiness outcomes.
"""
import pytest
from hypothesis import given, settings, strategies as st

from core.models import ScrapeResultType
from workers.dom_watch.classifier import (
    classify,
    classify_readiness,
    contains_baseline,
    normalize,
)
from workers.dom_watch.models import Readiness


# ASCII keeps upper()/lower() symmetric
words = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), max_size=40)
padding = st.text(alphabet=" \t\n", max_size=5)


# ============================================
# DECISION TABLE
# ============================================

class TestClassifyDecisionTable:

    def test_missing_text_on_initial_check_is_text_not_found(self):
        assert classify(None, "hello", initial=True) is ScrapeResultType.TEXT_NOT_FOUND

    def test_missing_text_on_recurring_check_is_change(self):
        assert classify(None, "hello", initial=False) is ScrapeResultType.CHANGE

    @pytest.mark.parametrize("initial", [True, False])
    def test_contained_baseline_is_no_change(self, initial):
        assert classify("Hello World", "hello", initial=initial) is ScrapeResultType.NO_CHANGE

    @pytest.mark.parametrize("initial", [True, False])
    def test_missing_baseline_is_change(self, initial):
        assert classify("out of stock", "in stock", initial=initial) is ScrapeResultType.CHANGE

    def test_substring_not_equality(self):
        assert classify("Current price: $10 (sale)", "price: $10") is ScrapeResultType.NO_CHANGE

    def test_case_and_whitespace_insensitive(self):
        assert classify("  Hello World  ", "hello") is classify("Hello World", "HELLO")
        assert classify("  Hello World  ", "hello") is ScrapeResultType.NO_CHANGE

    def test_empty_baseline_matches_any_text(self):
        assert classify("", "") is ScrapeResultType.NO_CHANGE
        assert classify("anything", "   ") is ScrapeResultType.NO_CHANGE

    def test_empty_text_is_present_not_missing(self):
        # "" is extracted content, only None means nothing was read
        assert classify("", "in stock", initial=True) is ScrapeResultType.CHANGE


class TestClassifyReadiness:

    def test_found_defers_to_text_classification(self):
        assert classify_readiness(Readiness.FOUND, initial=True) is None
        assert classify_readiness(Readiness.FOUND, initial=False) is None

    @pytest.mark.parametrize("initial", [True, False])
    def test_inconclusive_is_timeout(self, initial):
        assert classify_readiness(Readiness.INCONCLUSIVE, initial) is ScrapeResultType.TIMEOUT

    def test_absent_on_initial_check_is_element_not_found(self):
        assert classify_readiness(Readiness.ABSENT, initial=True) is ScrapeResultType.ELEMENT_NOT_FOUND

    def test_absent_on_recurring_check_is_change(self):
        assert classify_readiness(Readiness.ABSENT, initial=False) is ScrapeResultType.CHANGE


# ============================================
# PROPERTIES
# ============================================

@settings(max_examples=200)
@given(text=words, baseline=words, left=padding, right=padding)
def test_property_case_and_trim_insensitive(text, baseline, left, right):
    """Padding and case on either side never change the result kind."""
    plain = classify(text, baseline)
    assert classify(left + text.upper() + right, baseline.lower()) is plain
    assert classify(text.lower(), left + baseline.upper() + right) is plain


@settings(max_examples=200)
@given(prefix=words, baseline=words, suffix=words)
def test_property_embedded_baseline_never_changes(prefix, baseline, suffix):
    """Baseline surrounded by arbitrary copy is still NO_CHANGE."""
    extracted = f"{prefix} {baseline.strip()} {suffix}"
    assert contains_baseline(extracted, baseline)
    assert classify(extracted, baseline) is ScrapeResultType.NO_CHANGE


@given(text=words)
def test_property_normalize_is_idempotent(text):
    assert normalize(normalize(text)) == normalize(text)


@given(baseline=words, initial=st.booleans())
def test_property_result_is_one_of_the_text_kinds(baseline, initial):
    kinds = {ScrapeResultType.NO_CHANGE, ScrapeResultType.CHANGE, ScrapeResultType.TEXT_NOT_FOUND}
    assert classify(None, baseline, initial) in kinds
