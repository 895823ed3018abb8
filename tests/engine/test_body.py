from __future__ import annotations

from roadsync.contracts.roadmap import ItemKind, ItemLayer, ItemPriority, ItemStatus
from roadsync.engine.body import (
    bodies_equal,
    encode_body,
    normalize_body,
    parse_metadata_block,
    strip_metadata_block,
)
from tests.fakes.roadmap import make_item


def test_encode_body_layout() -> None:
    item = make_item(
        kind=ItemKind.BUG,
        layer=ItemLayer.DEVOPS,
        priority=ItemPriority.P0,
        description="  Fix login.  \n",
    )

    assert encode_body(item) == "\n".join(
        [
            "ROADSYNC_META_V1",
            "LABEL:auth",
            "KIND:bug",
            "LAYER:devops",
            "PRIORITY:P0",
            "START_DATE:2026-01-05",
            "END_ROADSYNC_META",
            "",
            "Fix login.",
            "",
        ]
    )


def test_encode_body_is_deterministic() -> None:
    assert encode_body(make_item()) == encode_body(make_item())


def test_encode_body_ignores_status_and_title() -> None:
    assert encode_body(make_item()) == encode_body(make_item(title="Renamed", status=ItemStatus.DONE))


def test_parse_metadata_block_reads_encoded_body() -> None:
    assert parse_metadata_block(encode_body(make_item())) == {
        "LABEL": "auth",
        "KIND": "feature",
        "LAYER": "backend",
        "PRIORITY": "P1",
        "START_DATE": "2026-01-05",
    }


def test_parse_metadata_block_returns_empty_when_missing() -> None:
    assert parse_metadata_block("just a description") == {}


def test_parse_metadata_block_requires_end_marker() -> None:
    assert parse_metadata_block("ROADSYNC_META_V1\nLABEL:auth\n\ntext") == {}


def test_parse_metadata_block_ignores_invalid_lines_and_empty_keys() -> None:
    body = "\n".join(["ROADSYNC_META_V1", "INVALID", ":missing-key", "KIND: bug ", "END_ROADSYNC_META"])

    assert parse_metadata_block(body) == {"KIND": "bug"}


def test_strip_metadata_block_returns_description() -> None:
    assert strip_metadata_block(encode_body(make_item(description="Line one\nLine two"))) == "Line one\nLine two"


def test_strip_metadata_block_without_block() -> None:
    assert strip_metadata_block("  plain text \n") == "plain text"


def test_normalize_body_folds_line_endings_and_trailing_space() -> None:
    assert normalize_body("a  \r\nb\rc\n\n") == "a\nb\nc"


def test_bodies_equal_tolerates_board_reformatting() -> None:
    body = encode_body(make_item())

    assert bodies_equal(body, body.replace("\n", "\r\n").rstrip())
    assert not bodies_equal(body, encode_body(make_item(description="Other")))
