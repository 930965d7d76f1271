"""Tests for CaseNumberSequence."""

import threading

import pytest

from casework_tasks.services.case_number_sequence import CaseNumberSequence


class TestCaseNumberSequence:
    """Tests for CaseNumberSequence."""

    def test_format(self):
        sequence = CaseNumberSequence()

        assert sequence.next_case_number() == "TASK000001"
        assert sequence.next_case_number() == "TASK000002"

    def test_custom_start(self):
        sequence = CaseNumberSequence(start=42)

        assert sequence.next_case_number() == "TASK000042"
        assert sequence.next_case_number() == "TASK000043"

    def test_values_beyond_width_not_truncated(self):
        sequence = CaseNumberSequence(start=1234567)

        assert sequence.next_case_number() == "TASK1234567"

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            CaseNumberSequence(start=-1)

    def test_concurrent_values_are_unique(self):
        sequence = CaseNumberSequence()
        seen = []
        lock = threading.Lock()

        def worker():
            values = [sequence.next_value() for _ in range(200)]
            with lock:
                seen.extend(values)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(seen) == 1600
        assert len(set(seen)) == 1600
        assert sorted(seen) == list(range(1, 1601))
