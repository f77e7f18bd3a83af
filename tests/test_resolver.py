"""Tests for Resolver find-or-create orchestration."""

import pytest

from findforge.errors import EmptyLookupKeysError, UnknownEventError, UnknownFieldError
from findforge.models import InMemoryModel
from findforge.resolver import Resolver
from support import User, UserProfile


@pytest.fixture
def resolver(users):
    return Resolver(users, find_by="email")


@pytest.fixture
def attributes():
    return {"name": "Some Name", "email": "a@x.com", "password": "SomePassword"}


def _recorder(resolver):
    """Attach a handler to every event that records the event name."""
    calls = []
    for event in ("build", "create", "found", "returned"):
        resolver.on(event, lambda user, event=event: calls.append(event))
    return calls


# =============================================================================
# find_or_create
# =============================================================================


class TestFindOrCreate:
    def test_creates_when_missing(self, resolver, users, attributes):
        user = resolver.find_or_create(attributes)
        assert isinstance(user, User)
        assert user.id is not None
        assert users.count() == 1

    def test_idempotent_rediscovery(self, resolver, users, attributes):
        first = resolver.find_or_create(attributes)
        second = resolver.find_or_create(attributes)
        assert second is first
        assert users.count() == 1

    def test_finds_entry_with_other_attributes(self, resolver, users, attributes):
        existing = users.persist(User(email="a@x.com"))
        assert resolver.find_or_create(attributes) is existing
        assert users.count() == 1

    def test_creates_when_another_entry_exists(self, resolver, users, attributes):
        users.persist(User(email="other@x.com"))
        user = resolver.find_or_create(attributes)
        assert user.email == "a@x.com"
        assert users.count() == 2

    def test_extra_attributes_do_not_affect_lookup(self, resolver, attributes):
        first = resolver.find_or_create(attributes)
        again = resolver.find_or_create({**attributes, "name": "B", "reference": "r"})
        assert again is first
        assert again.name == "Some Name"
        assert again.reference is None

    def test_string_lookup_keys_and_attribute_keys(self, users):
        resolver = Resolver(users, find_by=["email"])
        existing = users.persist(User(email="a@x.com"))
        assert resolver.find_or_create({" email": "a@x.com"}) is existing

    def test_lookup_field_in_other_casing_is_rediscovered(self, resolver, users):
        first = resolver.find_or_create({"Email": "a@x.com", "name": "A"})
        again = resolver.find_or_create({"Email": "a@x.com", "name": "B"})
        assert again is first
        assert first.email == "a@x.com"
        assert users.count() == 1

    def test_create_stores_lookup_field_under_declared_spelling(self, resolver):
        user = resolver.create({"EMAIL": "a@x.com"})
        assert user.email == "a@x.com"
        assert resolver.find({"email": "a@x.com"}) is user

    def test_no_attributes(self, users):
        resolver = Resolver(users, find_by="email")
        user = resolver.find_or_create()
        assert user.email is None
        assert resolver.find_or_create() is user

    def test_customizer_applies_on_create(self, resolver, attributes):
        user = resolver.find_or_create(attributes, lambda u: setattr(u, "name", "new name"))
        assert user.name == "new name"

    def test_customizer_not_called_when_found(self, resolver, users, attributes):
        users.persist(User(**attributes))
        calls = []
        resolver.find_or_create(attributes, calls.append)
        assert calls == []


# =============================================================================
# Hook scoping
# =============================================================================


class TestHookScoping:
    def test_created_path_events(self, resolver, attributes):
        calls = _recorder(resolver)
        resolver.find_or_create(attributes)
        assert calls == ["build", "create", "returned"]

    def test_found_path_events(self, resolver, users, attributes):
        users.persist(User(**attributes))
        calls = _recorder(resolver)
        resolver.find_or_create(attributes)
        assert calls == ["found", "returned"]

    def test_returned_fires_once_per_call(self, resolver, attributes):
        calls = []
        resolver.on("returned", calls.append)
        resolver.find_or_create(attributes)
        resolver.find_or_create(attributes)
        assert len(calls) == 2

    def test_found_hook_updates_found_record(self, resolver, users, attributes):
        existing = users.persist(User(**attributes))
        resolver.on("found", lambda user: setattr(user, "name", "new_name"))
        resolver.find_or_create(attributes)
        assert existing.name == "new_name"

    def test_found_hook_not_run_on_create(self, resolver, attributes):
        resolver.on("found", lambda user: setattr(user, "name", "new_name"))
        assert resolver.find_or_create(attributes).name == "Some Name"

    def test_build_hook_not_run_when_found(self, resolver, users, attributes):
        existing = users.persist(User(**attributes))
        resolver.on("build", lambda user: setattr(user, "name", "new_name"))
        resolver.find_or_create(attributes)
        assert existing.name == "Some Name"

    def test_create_hook_sees_persisted_record(self, resolver, attributes):
        ids = []
        resolver.on("create", lambda user: ids.append(user.id))
        resolver.find_or_create(attributes)
        assert ids == [1]

    def test_returned_hook_runs_on_both_paths(self, resolver, attributes):
        resolver.on("returned", lambda user: user.tags.append("returned"))
        user = resolver.find_or_create(attributes)
        resolver.find_or_create(attributes)
        assert user.tags == ["returned", "returned"]

    def test_hook_ordering_on_same_event(self, resolver, attributes):
        resolver.on("build", lambda user: setattr(user, "reference", "1"))
        resolver.on("build", lambda user: setattr(user, "reference", user.reference + "2"))
        assert resolver.find_or_create(attributes).reference == "12"

    def test_handler_failure_propagates(self, resolver, users, attributes):
        def boom(user):
            raise RuntimeError("returned failed")

        resolver.on("returned", boom)
        with pytest.raises(RuntimeError, match="returned failed"):
            resolver.find_or_create(attributes)
        assert users.count() == 1

    def test_handler_assigns_through_adapter(self, resolver, users, attributes):
        users.persist(User(**attributes))
        resolver.on("found", lambda user: resolver.adapter.assign(user, {"name": "seen"}))
        assert resolver.find_or_create(attributes).name == "seen"

    def test_adapter_assign_unknown_field_fails_in_handler(self, resolver, attributes):
        resolver.on("build", lambda user: resolver.adapter.assign(user, {"nickname": "x"}))
        with pytest.raises(UnknownFieldError, match="nickname"):
            resolver.find_or_create(attributes)


# =============================================================================
# on / hook
# =============================================================================


class TestOn:
    def test_on_returns_resolver(self, resolver):
        assert resolver.on("build", lambda user: None) is resolver

    def test_on_chains(self, resolver, attributes):
        (
            resolver
            .on("build", lambda user: setattr(user, "reference", "ref"))
            .on("returned", lambda user: user.tags.append("done"))
        )
        user = resolver.find_or_create(attributes)
        assert user.reference == "ref"
        assert user.tags == ["done"]

    def test_on_unknown_event_raises(self, resolver):
        with pytest.raises(UnknownEventError):
            resolver.on("saved", lambda user: None)

    def test_hook_decorator(self, resolver, attributes):
        @resolver.hook("build")
        def set_reference(user):
            user.reference = "decorated"

        assert set_reference.__name__ == "set_reference"
        assert resolver.find_or_create(attributes).reference == "decorated"


# =============================================================================
# Delegations and structure
# =============================================================================


class TestDelegations:
    def test_find(self, resolver, users):
        existing = users.persist(User(email="a@x.com"))
        assert resolver.find({"email": "a@x.com"}) is existing

    def test_build(self, resolver, users):
        user = resolver.build({"email": "a@x.com"})
        assert user.id is None
        assert users.count() == 0

    def test_create_always_creates(self, resolver, users):
        resolver.create({"email": "a@x.com"})
        resolver.create({"email": "a@x.com"})
        assert users.count() == 2

    def test_parts_share_channels(self, resolver):
        assert resolver.locator.channels is resolver.channels
        assert resolver.materializer.channels is resolver.channels


class TestStructure:
    def test_empty_find_by_rejected(self, users):
        with pytest.raises(EmptyLookupKeysError):
            Resolver(users, find_by=[])

    def test_equal_when_same_model_and_keys(self):
        assert Resolver(InMemoryModel(User), "email") == Resolver(InMemoryModel(User), ["email"])

    def test_not_equal_with_other_keys(self):
        assert Resolver(InMemoryModel(User), "email") != Resolver(InMemoryModel(User), "name")

    def test_not_equal_with_other_model(self):
        assert Resolver(InMemoryModel(User), "email") != Resolver(
            InMemoryModel(UserProfile), "email"
        )

    def test_properties(self, resolver):
        assert resolver.model_type is User
        assert list(resolver.lookup_keys) == ["email"]
