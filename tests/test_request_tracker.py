from repo_explorer.application.request_tracker import RequestTracker


def test_issue_supersedes_previous_token():
    tracker = RequestTracker()

    first = tracker.issue()
    second = tracker.issue()

    assert first.cancelled
    assert not second.cancelled
    assert second.generation == first.generation + 1
    assert tracker.is_current(second)
    assert not tracker.is_current(first)


def test_reset_cancels_current():
    tracker = RequestTracker()
    token = tracker.issue()

    tracker.reset()

    assert token.cancelled
    assert not tracker.is_current(token)
