"""Unit tests for coda_client.polling module."""

import pytest
from unittest.mock import MagicMock, patch

from coda_pages.coda_client.errors import APIAccessError, JobFailedError, JobTimeoutError
from coda_pages.coda_client.polling import PollPolicy, poll_until


def _states(*statuses):
    """fetch_status mock returning the given statuses in order."""
    return MagicMock(side_effect=[{"status": s} for s in statuses])


def _complete(state):
    return state["status"] == "complete"


def _failed(state):
    return state["status"] == "failed"


class FakeClock:
    """Monotonic clock advanced by the patched time.sleep."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


class TestPollPolicy:
    """Test cases for PollPolicy validation and delays."""

    def test_requires_a_bound(self):
        """A policy without max_attempts or timeout is rejected."""
        with pytest.raises(ValueError, match="max_attempts or timeout"):
            PollPolicy(max_attempts=None, timeout=None)

    def test_timeout_alone_is_a_bound(self):
        """timeout without max_attempts is accepted."""
        policy = PollPolicy(max_attempts=None, timeout=10.0)
        assert policy.timeout == 10.0

    def test_rejects_unknown_backoff(self):
        """Only fixed and exponential backoff are supported."""
        with pytest.raises(ValueError, match="Unknown backoff"):
            PollPolicy(backoff="linear")

    def test_rejects_zero_attempts(self):
        """max_attempts must allow at least one poll."""
        with pytest.raises(ValueError):
            PollPolicy(max_attempts=0)

    def test_fixed_delay(self):
        """Fixed backoff always waits the interval."""
        policy = PollPolicy(interval=2.0)
        assert [policy.delay_for(n) for n in range(4)] == [2.0, 2.0, 2.0, 2.0]

    def test_exponential_delay_is_capped(self):
        """Exponential backoff doubles up to max_interval."""
        policy = PollPolicy(interval=1.0, backoff="exponential", max_interval=5.0)
        assert [policy.delay_for(n) for n in range(5)] == [1.0, 2.0, 4.0, 5.0, 5.0]


class TestPollUntil:
    """Test cases for poll_until."""

    @patch('time.sleep')
    def test_complete_on_first_poll_does_not_sleep(self, mock_sleep):
        """A job that is already complete returns without waiting."""
        fetch = _states("complete")

        result = poll_until(fetch, _complete, PollPolicy(), "job-1")

        assert result == {"status": "complete"}
        assert fetch.call_count == 1
        mock_sleep.assert_not_called()

    @patch('time.sleep')
    def test_polls_until_complete(self, mock_sleep):
        """Pending states are polled again after the interval."""
        fetch = _states("inProgress", "inProgress", "complete")

        result = poll_until(fetch, _complete, PollPolicy(interval=0.5), "job-1")

        assert result["status"] == "complete"
        assert fetch.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.5, 0.5]

    @patch('time.sleep')
    def test_exponential_backoff_delays(self, mock_sleep):
        """Delays double between polls with exponential backoff."""
        fetch = _states("inProgress", "inProgress", "inProgress", "complete")
        policy = PollPolicy(interval=1.0, backoff="exponential", max_interval=30.0)

        poll_until(fetch, _complete, policy, "job-1")

        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0, 4.0]

    @patch('time.sleep')
    def test_failed_status_raises_immediately(self, mock_sleep):
        """A failed job raises JobFailedError with its detail."""
        fetch = MagicMock(side_effect=[
            {"status": "inProgress"},
            {"status": "failed", "error": "Page too large"},
        ])

        with pytest.raises(JobFailedError) as exc_info:
            poll_until(
                fetch, _complete, PollPolicy(), "job-1",
                is_failed=_failed,
                failure_detail=lambda s: s.get("error"),
            )

        assert exc_info.value.job_id == "job-1"
        assert exc_info.value.detail == "Page too large"
        assert fetch.call_count == 2

    @patch('time.sleep')
    def test_unknown_status_keeps_polling(self, mock_sleep):
        """Statuses that are neither complete nor failed count as pending."""
        fetch = _states("queued", "complete")

        poll_until(fetch, _complete, PollPolicy(), "job-1", is_failed=_failed)

        assert fetch.call_count == 2

    @patch('time.sleep')
    def test_max_attempts_bound(self, mock_sleep):
        """A job still pending after max_attempts polls raises JobTimeoutError."""
        fetch = MagicMock(return_value={"status": "inProgress"})

        with pytest.raises(JobTimeoutError) as exc_info:
            poll_until(fetch, _complete, PollPolicy(interval=0.1, max_attempts=3), "job-1")

        assert exc_info.value.attempts == 3
        assert fetch.call_count == 3
        assert mock_sleep.call_count == 2

    def test_timeout_bound(self):
        """A job still pending at the deadline raises JobTimeoutError."""
        clock = FakeClock()
        fetch = MagicMock(return_value={"status": "inProgress"})
        policy = PollPolicy(interval=1.0, max_attempts=None, timeout=3.5)

        with patch('time.sleep', side_effect=clock.sleep):
            with pytest.raises(JobTimeoutError) as exc_info:
                poll_until(fetch, _complete, policy, "job-1", clock=clock)

        # polls at t=0, 1, 2, 3; the next wait would pass the deadline
        assert fetch.call_count == 4
        assert exc_info.value.elapsed == 3.0

    @patch('time.sleep')
    def test_fetch_errors_propagate_without_retry(self, mock_sleep):
        """HTTP errors while polling are not retried."""
        fetch = MagicMock(side_effect=APIAccessError("Coda API failure", status_code=500))

        with pytest.raises(APIAccessError):
            poll_until(fetch, _complete, PollPolicy(), "job-1")

        assert fetch.call_count == 1
        mock_sleep.assert_not_called()
