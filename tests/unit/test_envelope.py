"""Tests for the response envelope (shape, pagination keys, cache re-tagging)."""

from app.application.dtos.envelope import ResponseEnvelope, build_envelope, found_message


def test_non_paginated_dict_has_no_pagination_keys() -> None:
    env = build_envelope(200, "task retrieved successfully", {"id": "1"}, "database", "task:1")
    assert env.to_dict() == {
        "statusCode": 200,
        "message": "task retrieved successfully",
        "data": {"id": "1"},
        "source": "database",
        "cacheKey": "task:1",
    }
    assert not env.is_paginated


def test_paginated_dict_has_camel_case_pagination() -> None:
    env = build_envelope(
        200, "ok", [], "database", "task_list:all",
        page=2, per_page=10, total_pages=3, total_items=25,
    )
    out = env.to_dict()
    assert out["page"] == 2
    assert out["perPage"] == 10
    assert out["totalPages"] == 3
    assert out["totalItems"] == 25


def test_from_cached_keeps_fields_and_retags_source() -> None:
    stored = build_envelope(
        200, "ok", [{"id": "1"}], "database", "task_list:a@x.com",
        page=1, per_page=50, total_pages=1, total_items=1,
    ).to_dict()
    env = ResponseEnvelope.from_cached(stored, "task_list:a@x.com")
    assert env.source == "cache"
    assert env.cache_key == "task_list:a@x.com"
    assert env.data == [{"id": "1"}]
    assert env.total_items == 1


def test_from_dict_without_pagination_stays_unpaginated() -> None:
    env = ResponseEnvelope.from_dict({"statusCode": 200, "message": "m", "data": None, "source": "database"})
    assert not env.is_paginated
    assert env.cache_key is None


def test_found_message() -> None:
    assert found_message("task", True) == "task retrieved successfully"
    assert found_message("task", False) == "No task found"
