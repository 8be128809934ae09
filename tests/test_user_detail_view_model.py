"""Tests for the user detail view-model."""
import asyncio
import threading
from github_users.application.user_detail_view_model import UserDetailViewModel
from github_users.domain.errors import ErrorKind, TransportError
from helpers import make_detail


def build(service, repository, events):
    return UserDetailViewModel(
        service,
        repository,
        on_user_detail_updated=events.updated,
        on_error=events.error,
    )


def test_defaults_without_detail(service, repository, events):
    """Test the accessor fallbacks before anything is loaded."""
    vm = build(service, repository, events)

    assert vm.current_detail is None
    assert vm.login == ""
    assert vm.location == "N/A"
    assert vm.followers == 0
    assert vm.following == 0
    assert vm.avatar_url is None
    assert vm.profile_url is None


def test_cached_detail_skips_network(service, repository, events):
    """Test that a cached record is served without a remote call."""
    repository.save_user_detail(make_detail("alice", location="Paris"))
    vm = build(service, repository, events)

    asyncio.run(vm.fetch_user_detail("alice"))

    assert service.detail_calls == []
    assert events.updates == 1
    assert vm.login == "alice"
    assert vm.location == "Paris"
    assert vm.followers == 10
    assert vm.following == 3
    assert vm.profile_url == "https://github.com/alice"


def test_network_detail_is_cached(service, repository, events):
    """Test that a fetched detail is saved and then served from cache."""
    detail = make_detail("bob")
    service.details["bob"] = detail
    vm = build(service, repository, events)

    asyncio.run(vm.fetch_user_detail("bob"))

    assert service.detail_calls == ["bob"]
    assert repository.saved_details == [detail]
    assert vm.current_detail == detail
    assert events.updates == 1

    second = build(service, repository, events)
    asyncio.run(second.fetch_user_detail("bob"))

    assert service.detail_calls == ["bob"]
    assert second.current_detail == detail


def test_missing_location_shows_placeholder(service, repository, events):
    """Test that a detail without location reports N/A."""
    service.details["carol"] = make_detail("carol", location=None)
    vm = build(service, repository, events)

    asyncio.run(vm.fetch_user_detail("carol"))

    assert vm.current_detail.location is None
    assert vm.location == "N/A"


def test_network_failure_keeps_previous_detail(service, repository, events):
    """Test that a failed fetch reports once and keeps the shown detail."""
    repository.save_user_detail(make_detail("alice"))
    vm = build(service, repository, events)
    asyncio.run(vm.fetch_user_detail("alice"))

    service.detail_error = TransportError("GET https://api.github.com/users/ghost failed with status 404: Not Found")
    asyncio.run(vm.fetch_user_detail("ghost"))

    assert vm.login == "alice"
    assert events.errors == ["GET https://api.github.com/users/ghost failed with status 404: Not Found"]
    assert events.updates == 1
    assert vm.last_error.kind is ErrorKind.TRANSPORT
    assert repository.fetch_user_detail("ghost") is None


def test_cache_read_failure_falls_back_to_network(service, repository, events):
    """Test that an unreadable cache is treated as a miss."""
    repository.fail_reads = True
    service.details["dave"] = make_detail("dave")
    vm = build(service, repository, events)

    asyncio.run(vm.fetch_user_detail("dave"))

    assert service.detail_calls == ["dave"]
    assert vm.login == "dave"
    assert events.errors == []


def test_cache_write_failure_still_updates(service, repository, events):
    """Test that a failed cache write is reported but the detail is shown."""
    repository.fail_writes = True
    service.details["erin"] = make_detail("erin")
    vm = build(service, repository, events)

    asyncio.run(vm.fetch_user_detail("erin"))

    assert vm.login == "erin"
    assert events.errors == ["Failed to save user detail to cache"]
    assert events.updates == 1
    assert vm.last_error.kind is ErrorKind.STORAGE


def test_cache_lookup_runs_off_the_event_loop(service, repository, events):
    """Test that the detail cache read does not run on the loop thread."""
    repository.save_user_detail(make_detail("alice"))
    vm = build(service, repository, events)

    async def scenario():
        await vm.fetch_user_detail("alice")
        return threading.get_ident()

    loop_thread = asyncio.run(scenario())

    assert len(repository.detail_read_threads) == 1
    assert repository.detail_read_threads[0] != loop_thread
    assert vm.login == "alice"
