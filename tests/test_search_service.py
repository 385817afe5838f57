from concurrent.futures import ThreadPoolExecutor

from fakes import API, FakeResponse, repo_payload, user_payload
from repo_explorer.application.request_tracker import RequestTracker
from repo_explorer.application.search_service import SearchService, validate_username
from repo_explorer.domain.criteria import Criteria
from repo_explorer.domain.results import INVALID_INPUT, NOT_FOUND, RATE_LIMITED, SUPERSEDED

USER_URL = f"{API}/users/octocat"
REPOS_URL = f"{API}/users/octocat/repos"

REPOS = [
    repo_payload(1, "dotfiles", stargazers_count=2),
    repo_payload(2, "archived-thing", stargazers_count=90, archived=True),
    repo_payload(3, "linguist", stargazers_count=40, language="Ruby"),
]


def test_search_filters_and_sorts(client, fake_session):
    fake_session.add(USER_URL, FakeResponse(200, user_payload()))
    fake_session.add(REPOS_URL, FakeResponse(200, REPOS))
    service = SearchService(client, max_pages=2)

    result = service.search("octocat", Criteria())

    assert result.error is None
    assert result.user.login == "octocat"
    assert [r.name for r in result.repositories] == ["linguist", "dotfiles"]
    assert [r.name for r in result.fetched] == ["dotfiles", "archived-thing", "linguist"]


def test_refilter_reuses_fetched_list_without_network(client, fake_session):
    fake_session.add(USER_URL, FakeResponse(200, user_payload()))
    fake_session.add(REPOS_URL, FakeResponse(200, REPOS))
    service = SearchService(client)
    result = service.search("octocat", Criteria())
    calls_before = len(fake_session.calls)

    refiltered = service.refilter(result.fetched, Criteria(include_archived=True, language="ruby"))

    assert [r.name for r in refiltered] == ["linguist"]
    assert len(fake_session.calls) == calls_before


def test_search_invalid_username_makes_no_request(client, fake_session):
    service = SearchService(client)

    empty = service.search("  ", Criteria())
    malformed = service.search("not a user!", Criteria())

    assert empty.error.kind == INVALID_INPUT
    assert malformed.error.kind == INVALID_INPUT
    assert malformed.error.message == "Invalid GitHub username format"
    assert fake_session.calls == []


def test_user_error_clears_everything(client, fake_session):
    fake_session.add(USER_URL, FakeResponse(404, {}))
    fake_session.add(REPOS_URL, FakeResponse(404, {}))

    result = SearchService(client).search("octocat", Criteria())

    assert result.error.kind == NOT_FOUND
    assert result.user is None
    assert result.repositories == []


def test_repository_error_keeps_user(client, fake_session):
    fake_session.add(USER_URL, FakeResponse(200, user_payload()))
    fake_session.add(REPOS_URL, FakeResponse(403, {}))

    result = SearchService(client).search("octocat", Criteria())

    assert result.error.kind == RATE_LIMITED
    assert result.user.login == "octocat"
    assert result.repositories == []
    assert result.fetched == []


def test_search_with_injected_executor(client, fake_session):
    fake_session.add(USER_URL, FakeResponse(200, user_payload()))
    fake_session.add(REPOS_URL, FakeResponse(200, REPOS))

    with ThreadPoolExecutor(max_workers=2) as executor:
        result = SearchService(client, executor=executor).search("octocat", Criteria(sort_by="updated"))

    assert result.error is None
    assert len(result.repositories) == 2


def test_superseded_search_is_discarded(client, fake_session):
    tracker = RequestTracker()
    stale = tracker.issue()
    fake_session.add(USER_URL, FakeResponse(200, user_payload()))
    fake_session.add(REPOS_URL, FakeResponse(200, REPOS))
    # A newer search starts while the first one's user request is in flight
    fake_session.on_get = lambda url: tracker.issue() if url == USER_URL else None

    result = SearchService(client).search("octocat", Criteria(), token=stale)

    assert result.error.kind == SUPERSEDED
    assert result.user is None
    assert result.repositories == []
    assert not tracker.is_current(stale)


def test_validate_username():
    assert validate_username("octo-cat") is None
    assert validate_username(" octocat ") is None
    assert validate_username("-octocat").kind == INVALID_INPUT
    assert validate_username("a" * 40).kind == INVALID_INPUT
