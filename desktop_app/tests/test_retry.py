from __future__ import annotations

import pytest

from timesheet_portal.retry import RetryPolicy, Verdict


def _accept_lists(value):
    return Verdict.SUCCESS if isinstance(value, list) else Verdict.RETRY


def test_first_success_wins():
    sleeps = []
    answers = iter([{"ok": True, "id": "x"}, ["first"], ["second"]])
    policy = RetryPolicy(attempts=3, delay=0.8, sleep=sleeps.append)

    outcome = policy.run(lambda _attempt: next(answers), _accept_lists)

    assert outcome.ok
    assert outcome.value == ["first"]
    assert outcome.attempts == 2
    assert sleeps == [0.8]


def test_exhausted_policy_reports_retry_verdict():
    sleeps = []
    seen = []
    policy = RetryPolicy(attempts=3, delay=0.5, sleep=sleeps.append)

    def operation(attempt):
        seen.append(attempt)
        return {"ok": True}

    outcome = policy.run(operation, _accept_lists)

    assert not outcome.ok
    assert outcome.verdict is Verdict.RETRY
    assert seen == [1, 2, 3]
    assert sleeps == [0.5, 0.5]


def test_listed_exceptions_count_as_failed_attempts():
    sleeps = []
    policy = RetryPolicy(attempts=2, delay=0.1, retry_on=(ConnectionError,), sleep=sleeps.append)

    def operation(_attempt):
        raise ConnectionError("offline")

    outcome = policy.run(operation, _accept_lists)

    assert outcome.attempts == 2
    assert isinstance(outcome.error, ConnectionError)
    assert outcome.value is None


def test_unlisted_exceptions_propagate():
    policy = RetryPolicy(attempts=3, retry_on=(ConnectionError,), sleep=lambda _s: None)

    def operation(_attempt):
        raise KeyError("bug")

    with pytest.raises(KeyError):
        policy.run(operation, _accept_lists)


def test_fatal_verdict_stops_immediately():
    sleeps = []
    policy = RetryPolicy(attempts=3, sleep=sleeps.append)

    outcome = policy.run(lambda _attempt: "denied", lambda _value: Verdict.FATAL)

    assert outcome.verdict is Verdict.FATAL
    assert outcome.attempts == 1
    assert sleeps == []


def test_single_attempt_never_sleeps():
    sleeps = []
    policy = RetryPolicy(attempts=1, delay=5, sleep=sleeps.append)
    outcome = policy.run(lambda _attempt: None, _accept_lists)
    assert outcome.attempts == 1
    assert sleeps == []
