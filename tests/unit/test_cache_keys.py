"""Tests for cache key builders."""

import pytest

from app.infrastructure.cache.keys import entity_key, entity_prefix, list_key, list_prefix


def test_entity_key() -> None:
    assert entity_key("task", "42") == "task:42"
    assert entity_prefix("permission") == "permission:"


def test_list_key_per_email_and_all() -> None:
    assert list_key("task", "a@x.com") == "task_list:a@x.com"
    assert list_key("task") == "task_list:all"
    assert list_key("task", "") == "task_list:all"
    assert list_prefix("permission") == "permission_list:"


def test_entity_key_rejects_separator_in_id() -> None:
    with pytest.raises(ValueError, match="separator"):
        entity_key("task", "a:b")


def test_empty_components_rejected() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        entity_key("task", "")
    with pytest.raises(ValueError, match="must not be empty"):
        list_key("", "a@x.com")
