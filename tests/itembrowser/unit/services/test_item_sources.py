from __future__ import annotations

import random
from pathlib import Path

import pytest

from itembrowser.infra.config import AppConfig
from itembrowser.services.items import (
    SAMPLE_ITEMS,
    ItemLoadError,
    JsonItemSource,
    SampleItemSource,
    build_item_source,
)


def test_sample_source_returns_catalogue_after_simulated_latency() -> None:
    sleeps: list[float] = []
    source = SampleItemSource(latency_seconds=0.25, sleep=sleeps.append)

    items = source.load_items()

    assert items == list(SAMPLE_ITEMS)
    assert sleeps == [0.25]


def test_sample_source_fails_when_rate_is_one() -> None:
    source = SampleItemSource(failure_rate=1.0, rng=random.Random(7))
    with pytest.raises(ItemLoadError):
        source.load_items()


def test_sample_source_rejects_invalid_failure_rate() -> None:
    with pytest.raises(ValueError):
        SampleItemSource(failure_rate=1.5)


def test_json_source_reads_object_with_items(tmp_path: Path) -> None:
    path = tmp_path / "items.json"
    path.write_text(
        '{"items": [{"id": "a", "title": "Ada Lovelace", "subtitle": "math"},'
        ' {"title": "Grace Hopper"}]}',
        encoding="utf-8",
    )

    items = JsonItemSource(path).load_items()

    assert [(item.item_id, item.title, item.subtitle) for item in items] == [
        ("a", "Ada Lovelace", "math"),
        ("item-2", "Grace Hopper", ""),
    ]


def test_json_source_reads_bare_array(tmp_path: Path) -> None:
    path = tmp_path / "items.json"
    path.write_text('[{"id": "x", "title": "Only"}]', encoding="utf-8")
    assert [item.item_id for item in JsonItemSource(path).load_items()] == ["x"]


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        '{"rows": []}',
        "[1, 2]",
        '[{"id": "no-title"}]',
        '[{"id": "x", "title": null}]',
    ],
)
def test_json_source_wraps_bad_content(tmp_path: Path, content: str) -> None:
    path = tmp_path / "items.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ItemLoadError):
        JsonItemSource(path).load_items()


def test_json_source_treats_null_fields_as_missing(tmp_path: Path) -> None:
    path = tmp_path / "items.json"
    path.write_text(
        '[{"id": null, "title": "Solo", "subtitle": null, "body": null}]', encoding="utf-8"
    )

    (item,) = JsonItemSource(path).load_items()

    assert (item.item_id, item.subtitle, item.body) == ("item-1", "", "")


def test_json_source_wraps_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ItemLoadError):
        JsonItemSource(tmp_path / "missing.json").load_items()


def test_build_item_source_prefers_configured_file(tmp_path: Path) -> None:
    path = tmp_path / "items.json"
    source = build_item_source(AppConfig(items_path=str(path)))
    assert isinstance(source, JsonItemSource)
    assert source.path == path
    assert isinstance(build_item_source(AppConfig()), SampleItemSource)
