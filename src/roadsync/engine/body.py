"""Board body codec.

The board has no native columns for kind, layer, priority or start date, so
these travel in a key/value block at the top of the item body, followed by the
description::

    ROADSYNC_META_V1
    LABEL:auth
    KIND:feature
    LAYER:backend
    PRIORITY:P1
    START_DATE:2026-01-05
    END_ROADSYNC_META

    Users can sign in with email and password.

Encoding is deterministic so re-pushing an unchanged item yields a
byte-identical body.
"""

from __future__ import annotations

from roadsync.contracts.roadmap import RoadmapItem

_META_START = "ROADSYNC_META_V1"
_META_END = "END_ROADSYNC_META"


def encode_body(item: RoadmapItem) -> str:
    metadata_block = "\n".join(
        [
            _META_START,
            f"LABEL:{item.label}",
            f"KIND:{item.kind.value}",
            f"LAYER:{item.layer.value}",
            f"PRIORITY:{item.priority.value}",
            f"START_DATE:{item.start_date.isoformat()}",
            _META_END,
        ]
    )
    return f"{metadata_block}\n\n{item.description.strip()}\n"


def _block_bounds(lines: list[str]) -> tuple[int, int] | None:
    stripped = [line.strip() for line in lines]
    try:
        start = stripped.index(_META_START)
        end = stripped.index(_META_END, start + 1)
    except ValueError:
        return None
    return start, end


def parse_metadata_block(body: str) -> dict[str, str]:
    """Extract key/value metadata from a ROADSYNC block; ``{}`` when absent."""
    lines = body.splitlines()
    bounds = _block_bounds(lines)
    if bounds is None:
        return {}
    start, end = bounds

    metadata: dict[str, str] = {}
    for line in lines[start + 1 : end]:
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if key:
            metadata[key] = value.strip()
    return metadata


def strip_metadata_block(body: str) -> str:
    """Return *body* without its ROADSYNC block, i.e. the description text."""
    lines = body.splitlines()
    bounds = _block_bounds(lines)
    if bounds is None:
        return body.strip()
    start, end = bounds
    return "\n".join(lines[:start] + lines[end + 1 :]).strip()


def normalize_body(body: str) -> str:
    """Canonical form for comparing bodies.

    Boards commonly rewrite line endings and trailing whitespace; neither is a
    content change.
    """
    lines = body.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return "\n".join(line.rstrip() for line in lines).strip()


def bodies_equal(left: str, right: str) -> bool:
    return normalize_body(left) == normalize_body(right)
