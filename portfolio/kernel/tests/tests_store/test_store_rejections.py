"""
Portfolio Store — Rejection Tests

Invalid records raise ValidationError and leave the store exactly as it was:
same canonical collections, same view, no notifications, nothing persisted.
"""

import pytest

from portfolio.kernel.types import PREFERENCES_KEY
from portfolio.kernel.validators import ValidationError


class TestProfileRejections:
    def test_missing_name(self, store, make_profile, recorder):
        store.set_profile(make_profile())
        before = store.get_profile()
        store.add_event_listener("profile", recorder)

        with pytest.raises(ValidationError):
            store.set_profile(make_profile(name=""))

        assert store.get_profile() is before
        assert recorder.calls == []

    def test_invalid_linkedin_url(self, store, make_profile):
        with pytest.raises(ValidationError) as exc_info:
            store.set_profile(make_profile(linkedinUrl="not-a-url"))
        assert any("LinkedIn" in e for e in exc_info.value.errors)
        assert store.get_profile() is None


class TestAchievementRejections:
    def test_title_only_achievement(self, store, make_achievement):
        store.set_achievements([make_achievement(1)])
        before = store.get_achievements()

        with pytest.raises(ValidationError):
            store.set_achievements([{"title": "X"}])

        assert store.get_achievements() is before
        assert [a.id for a in store.get_achievements()] == ["achievement-1"]

    def test_one_bad_element_fails_whole_call(self, store, make_achievement, recorder):
        store.add_event_listener("achievements", recorder)
        with pytest.raises(ValidationError):
            store.set_achievements([make_achievement(1), make_achievement(2, description="")])
        assert store.get_achievements() == []
        assert recorder.calls == []

    def test_duplicate_ids(self, store, make_achievement):
        with pytest.raises(ValidationError):
            store.set_achievements([make_achievement(1), make_achievement(1)])


class TestContentRejections:
    def test_bad_type_keeps_view(self, store, make_content, make_recorder):
        store.set_content([make_content(n) for n in range(1, 8)])
        store.set_current_page(2)
        content_before = store.get_content()
        view_before = store.get_filtered_content()
        content_events, view_events = make_recorder(), make_recorder()
        store.add_event_listener("content", content_events)
        store.add_event_listener("filteredContent", view_events)

        with pytest.raises(ValidationError):
            store.set_content([make_content(1, type="podcast")])

        assert store.get_content() is content_before
        assert store.get_filtered_content() is view_before
        assert store.get_current_page() == 2
        assert content_events.calls == []
        assert view_events.calls == []

    def test_nothing_persisted_on_failure(self, store, durable, make_content):
        with pytest.raises(ValidationError):
            store.set_content([{"id": "content-1"}])
        assert durable.get(PREFERENCES_KEY) is None

    def test_error_lists_every_problem(self, store, make_content):
        with pytest.raises(ValidationError) as exc_info:
            store.set_content([make_content(1, title=""), make_content(2, type="video")])
        assert len(exc_info.value.errors) == 2
        assert exc_info.value.errors[0].startswith("Content item 0:")
        assert exc_info.value.errors[1].startswith("Content item 1:")
