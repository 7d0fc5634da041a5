"""Tests for the sequence compactor."""

import pytest

from playwright_recorder.recording.compactor import (
    DETECTORS,
    CompactionMatch,
    SequenceCompactor,
    compact_events,
    detect_click_sequence,
    detect_fill_sequence,
    is_single_character,
)
from playwright_recorder.recording.models import (
    PageEvent,
    click,
    fill,
    key_press,
    mouse_down,
    mouse_up,
    page_load,
)

# =============================================================================
# Click sequence
# =============================================================================


class TestClickSequence:
    """Tests for the click-sequence detector."""

    @pytest.mark.parametrize("target", ["#btn", ".menu > li:nth-of-type(2)", ""])
    def test_down_up_click_becomes_click(self, target):
        """Test a same-target triple compacts to one click."""
        events = [mouse_down(target), mouse_up(target), click(target)]
        assert compact_events(events) == [click(target)]

    def test_mismatched_targets_pass_through(self):
        """Test a different mouseup target breaks the pattern."""
        events = [mouse_down("#a"), mouse_up("#b"), click("#a")]
        assert compact_events(events) == events

    def test_mismatched_click_target_passes_through(self):
        """Test a different click target breaks the pattern."""
        events = [mouse_down("#a"), mouse_up("#a"), click("#b")]
        assert compact_events(events) == events

    def test_window_must_be_contiguous(self):
        """Test an event between down and up prevents compaction."""
        events = [mouse_down("#a"), page_load(), mouse_up("#a"), click("#a")]
        assert compact_events(events) == events

    def test_incomplete_sequence_passes_through(self):
        """Test a lone down/up pair is left as-is."""
        events = [mouse_down("#a"), mouse_up("#a")]
        assert compact_events(events) == events

    def test_detector_reports_length(self):
        """Test detector match length."""
        events = [page_load(), mouse_down("#a"), mouse_up("#a"), click("#a")]

        assert detect_click_sequence(events, 0) is None
        assert detect_click_sequence(events, 1) == CompactionMatch(event=click("#a"), length=3)

    def test_bare_click_passes_through(self):
        """Test a click without down/up is kept."""
        assert compact_events([click("#a")]) == [click("#a")]

    def test_consecutive_clicks(self):
        """Test two triples in a row."""
        events = [
            mouse_down("#a"), mouse_up("#a"), click("#a"),
            mouse_down("#b"), mouse_up("#b"), click("#b"),
        ]
        assert compact_events(events) == [click("#a"), click("#b")]


# =============================================================================
# Fill sequence
# =============================================================================


class TestFillSequence:
    """Tests for the fill-sequence detector."""

    def test_keypress_run_becomes_fill_with_last_value(self):
        """Test n keypresses compact to one fill with the final value."""
        events = [
            key_press("#in", "h", "h"),
            key_press("#in", "e", "he"),
            key_press("#in", "y", "hey"),
        ]
        assert compact_events(events) == [fill("#in", "hey")]

    def test_single_keypress(self):
        """Test a run of length one."""
        assert compact_events([key_press("#in", "x", "x")]) == [fill("#in", "x")]

    def test_named_key_does_not_start_fill(self):
        """Test a multi-character key passes through and a run starts after it."""
        events = [
            key_press("#in", "Shift", ""),
            key_press("#in", "A", "A"),
            key_press("#in", "b", "Ab"),
        ]
        assert compact_events(events) == [
            key_press("#in", "Shift", ""),
            fill("#in", "Ab"),
        ]

    def test_named_key_continues_run(self):
        """Test continuation keys are not length-restricted."""
        events = [
            key_press("#in", "a", "a"),
            key_press("#in", "Backspace", ""),
            key_press("#in", "b", "b"),
        ]
        assert compact_events(events) == [fill("#in", "b")]

    def test_trailing_enter_is_absorbed(self):
        """Test an Enter after typing belongs to the run."""
        events = [key_press("#q", "a", "a"), key_press("#q", "Enter", "a")]
        assert compact_events(events) == [fill("#q", "a")]

    def test_run_stops_at_other_target(self):
        """Test a keypress on another field starts a new run."""
        events = [
            key_press("#user", "a", "a"),
            key_press("#pass", "b", "b"),
            key_press("#pass", "c", "bc"),
        ]
        assert compact_events(events) == [fill("#user", "a"), fill("#pass", "bc")]

    def test_run_stops_at_other_event(self):
        """Test a non-keypress event ends the run."""
        events = [key_press("#in", "a", "a"), page_load(), key_press("#in", "b", "ab")]
        assert compact_events(events) == [fill("#in", "a"), page_load(), fill("#in", "ab")]

    def test_detector_reports_length(self):
        """Test detector match length."""
        events = [key_press("#in", "a", "a"), key_press("#in", "b", "ab"), page_load()]

        match = detect_fill_sequence(events, 0)
        assert match == CompactionMatch(event=fill("#in", "ab"), length=2)
        assert detect_fill_sequence(events, 2) is None
        assert detect_fill_sequence(events, 3) is None

    def test_keypress_without_key_passes_through(self):
        """Test a malformed keypress is not compacted."""
        event = PageEvent.from_dict({"type": "keypress", "target": "#in"})
        assert compact_events([event]) == [event]

    def test_non_string_key_passes_through(self):
        """Test a keypress whose key is not a string is left alone."""
        event = PageEvent("keypress", target="#in", key=5, input_value="5")
        assert compact_events([event]) == [event]

    def test_numeric_key_from_payload_starts_fill(self):
        """Test a numeric key from a payload is read as its digit."""
        event = PageEvent.from_dict({"type": "keypress", "target": "#in", "key": 5, "inputValue": "5"})
        assert compact_events([event]) == [fill("#in", "5")]

    def test_astral_key_does_not_start_fill(self):
        """Test a key outside the BMP counts as two characters."""
        emoji = key_press("#in", "\U0001F600", "\U0001F600")
        assert detect_fill_sequence([emoji], 0) is None
        assert compact_events([emoji]) == [emoji]

    def test_bmp_key_starts_fill(self):
        """Test a non-ASCII key inside the BMP opens a run."""
        events = [key_press("#in", "é", "é")]
        assert compact_events(events) == [fill("#in", "é")]


class TestIsSingleCharacter:
    """Tests for the key length check."""

    @pytest.mark.parametrize("key,expected", [
        ("a", True),
        ("é", True),
        ("\ud83d", True),
        ("\U0001F600", False),
        ("Enter", False),
        ("", False),
        (None, False),
        (5, False),
    ])
    def test_is_single_character(self, key, expected):
        """Test keys are measured in UTF-16 code units."""
        assert is_single_character(key) is expected


# =============================================================================
# Whole pipeline
# =============================================================================


class TestSequenceCompactor:
    """Tests for SequenceCompactor."""

    def test_empty_log(self):
        """Test empty input gives empty output."""
        assert SequenceCompactor().compact([]) == []

    def test_mixed_log(self, login_events):
        """Test click, fill and page load together."""
        assert compact_events(login_events) == [
            click("#btn"),
            fill("#in", "ab"),
            page_load(),
        ]

    def test_detector_priority(self):
        """Test the click detector is tried before the fill detector."""
        assert DETECTORS == (detect_click_sequence, detect_fill_sequence)

    def test_custom_detector_order_is_respected(self):
        """Test the first matching detector wins."""
        def swallow_everything(events, start):
            return CompactionMatch(event=page_load(), length=len(events) - start)

        compactor = SequenceCompactor(detectors=[swallow_everything, *DETECTORS])
        events = [mouse_down("#a"), mouse_up("#a"), click("#a")]

        assert compactor.compact(events) == [page_load()]

    def test_unknown_events_pass_through(self):
        """Test unknown kinds are copied unchanged."""
        scroll = PageEvent.from_dict({"type": "scroll", "target": "body"})
        assert compact_events([scroll, click("#a")]) == [scroll, click("#a")]

    def test_growing_prefix_absorbs_pending_click(self):
        """Test a pending mousedown is replaced once the click arrives."""
        first_pass = compact_events([mouse_down("#a")])
        second_pass = compact_events([mouse_down("#a"), mouse_up("#a"), click("#a")])

        assert first_pass == [mouse_down("#a")]
        assert second_pass == [click("#a")]

    def test_input_not_modified(self, login_events):
        """Test compaction leaves the snapshot untouched."""
        snapshot = tuple(login_events)
        compact_events(snapshot)
        assert snapshot == tuple(login_events)
