"""Tests for comment visibility rules and display transforms."""

from datetime import datetime, timedelta, timezone

from memberportal.comments.visibility import (
    ANONYMOUS_AUTHOR_NAME,
    ORGANIZATION_AUTHOR_NAME,
    is_samira_visible,
    member_feed,
    samira_feed,
    steerco_view,
)
from memberportal.models.comment import Comment
from memberportal.models.enums import Channel, CommentSource

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _comment(id, channel=Channel.MEMBER, minutes=0, **kw) -> Comment:
    return Comment(
        id=id,
        channel=channel,
        deal_ids=[10],
        text=f"comment {id}",
        created_at=T0 + timedelta(minutes=minutes),
        updated_at=T0 + timedelta(minutes=minutes),
        **kw,
    )


def test_member_feed_excludes_steerco_only_and_sorts_newest_first():
    comments = [
        _comment(1, minutes=1, author_id=1, author_name="Member One"),
        _comment(2, minutes=3, author_id=2, author_name="Member Two", steerco_only=True),
        _comment(3, minutes=2, author_id=2, author_name="Member Two"),
    ]
    feed = member_feed(comments, viewer_id=1)
    assert [v.id for v in feed] == [3, 1]


def test_member_feed_redacts_anonymous_authors():
    comments = [_comment(1, author_id=1, author_name="Member One", is_anonymous=True)]
    view = member_feed(comments, viewer_id=1)[0]
    assert view.author.id is None
    assert view.author.name == ANONYMOUS_AUTHOR_NAME
    assert view.is_own is False


def test_member_feed_marks_own_comments():
    comments = [
        _comment(1, author_id=1, author_name="Member One"),
        _comment(2, minutes=1, author_id=2, author_name="Member Two"),
    ]
    views = {v.id: v for v in member_feed(comments, viewer_id=1)}
    assert views[1].is_own is True
    assert views[1].author.name == "Member One"
    assert views[2].is_own is False


def test_member_feed_ties_break_by_id_ascending():
    comments = [_comment(7, author_id=1), _comment(5, author_id=1), _comment(6, author_id=1)]
    assert [v.id for v in member_feed(comments, viewer_id=1)] == [5, 6, 7]


def test_member_feed_serializes_camel_case():
    view = member_feed([_comment(1, author_id=1, is_anonymous=True)], viewer_id=1)[0]
    data = view.model_dump(mode="json", by_alias=True)
    assert data["author"] == {"id": None, "name": "Anonymous Member"}
    assert data["isOwn"] is False
    assert data["commentText"] == "comment 1"
    assert "createdDate" in data and "lastUpdated" in data


def test_steerco_view_merges_sources_by_creation_time():
    steerco = [
        _comment(100, Channel.STEERCO, minutes=1, author_id=3, author_name="Member Three"),
        _comment(101, Channel.STEERCO, minutes=4, author_id=1, author_name="Member One"),
    ]
    member_only = [
        _comment(1, minutes=3, author_id=2, author_name="Member Two", steerco_only=True, is_anonymous=True),
        _comment(2, minutes=2, author_id=3, author_name="Member Three", steerco_only=True),
    ]
    views = steerco_view(steerco, member_only, viewer_id=3)

    assert [v.id for v in views] == [101, 1, 2, 100]
    by_id = {v.id: v for v in views}
    assert by_id[101].source == CommentSource.STEERCO
    assert by_id[1].source == CommentSource.MEMBER_STEERCO_ONLY
    assert by_id[1].author.name == ANONYMOUS_AUTHOR_NAME
    assert by_id[1].is_anonymous is True
    assert by_id[2].is_own is True
    assert by_id[100].is_own is True
    assert by_id[100].author.id == 3


def test_steerco_view_ignores_member_comments_not_marked_steerco_only():
    views = steerco_view([], [_comment(1, author_id=2)], viewer_id=3)
    assert views == []


def test_samira_targeting():
    broadcast = _comment(1, Channel.SAMIRA)
    targeted = _comment(2, Channel.SAMIRA, minutes=1, target_member_ids=[2, 5])

    assert is_samira_visible(broadcast, 1)
    assert not is_samira_visible(targeted, 1)
    assert is_samira_visible(targeted, 2)

    outsider = samira_feed([broadcast, targeted], viewer_id=1)
    insider = samira_feed([broadcast, targeted], viewer_id=2)
    assert [v.id for v in outsider] == [1]
    assert [v.id for v in insider] == [2, 1]
    assert insider[0].is_targeted is True
    assert insider[0].target_member_count == 2
    assert insider[1].is_targeted is False
    assert all(v.author.id is None and v.author.name == ORGANIZATION_AUTHOR_NAME for v in insider)
