"""
Shape normalization for list endpoints.

List endpoints are not stable about where they put the records:
`{data: [...]}`, `{data: {files: [...]}}`, `{data: {items: [...]}}`,
`{data: {results: [...]}}` and a handful of trash-specific containers have
all been observed. A decoder takes the unwrapped body and returns a list of
records, or None when the shape is not its own. Decoders are tried in
order and the first non-empty result wins.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from driveview.models import ItemKind

Record = dict[str, Any]
Decoder = Callable[[Any, Optional[ItemKind]], Optional[list[Record]]]

_KIND_CONTAINERS: dict[str, str] = {"file": "files", "folder": "folders"}
_TRASH_CONTAINERS: tuple[str, ...] = ("trash", "trashItems", "trashFiles", "trashFolders")


def unwrap(payload: Any) -> Any:
    """Strip the `{data: ...}` envelope if present."""
    if isinstance(payload, dict) and "data" in payload and payload["data"] is not None:
        return payload["data"]
    return payload


def _records(values: Any) -> Optional[list[Record]]:
    if not isinstance(values, list):
        return None
    return [v for v in values if isinstance(v, dict)]


def _tagged(values: Any, kind: Optional[ItemKind]) -> Optional[list[Record]]:
    records = _records(values)
    if records is None or kind is None:
        return records
    return [r for r in records if r.get("type") == kind]


def decode_bare_list(body: Any, kind: Optional[ItemKind]) -> Optional[list[Record]]:
    return _records(body)


def decode_kind_container(body: Any, kind: Optional[ItemKind]) -> Optional[list[Record]]:
    if not isinstance(body, dict):
        return None
    if kind is not None:
        return _records(body.get(_KIND_CONTAINERS[kind]))
    for name in _KIND_CONTAINERS.values():
        records = _records(body.get(name))
        if records:
            return records
    return None


def decode_items(body: Any, kind: Optional[ItemKind]) -> Optional[list[Record]]:
    if not isinstance(body, dict):
        return None
    return _tagged(body.get("items"), kind)


def decode_results(body: Any, kind: Optional[ItemKind]) -> Optional[list[Record]]:
    if not isinstance(body, dict):
        return None
    return _tagged(body.get("results"), kind)


def decode_trash_containers(body: Any, kind: Optional[ItemKind]) -> Optional[list[Record]]:
    if not isinstance(body, dict):
        return None
    for name in _TRASH_CONTAINERS:
        records = _records(body.get(name))
        if records:
            return records
    return None


DEFAULT_DECODERS: tuple[Decoder, ...] = (
    decode_bare_list,
    decode_kind_container,
    decode_items,
    decode_results,
    decode_trash_containers,
)


def extract_records(
    payload: Any,
    kind: Optional[ItemKind] = None,
    *,
    decoders: Sequence[Decoder] = DEFAULT_DECODERS,
) -> list[Record]:
    """
    Extract the list of records from a list-endpoint response.

    Never raises for an unexpected shape; returns [] when nothing matches.
    """
    body = unwrap(payload)
    for decoder in decoders:
        records = decoder(body, kind)
        if records:
            return records
    return []


_SHARE_CONTAINERS: tuple[str, ...] = ("results", "items", "shares")
_SHARE_TARGET_KEYS: tuple[str, ...] = ("item", "target", "file", "folder")


def extract_share_targets(payload: Any) -> list[Record]:
    """
    Return the shared items from a `my-shares` response.

    Share envelopes may sit one `data` level deeper than usual, and each
    share wraps its item under one of several keys (or is the item itself).
    """
    body = unwrap(payload)
    shares: list[Record] = []
    for level in (body, unwrap(body)):
        if isinstance(level, list):
            shares = _records(level) or []
        elif isinstance(level, dict):
            for name in _SHARE_CONTAINERS:
                found = _records(level.get(name))
                if found:
                    shares = found
                    break
        if shares:
            break

    targets: list[Record] = []
    for share in shares:
        target = share
        for key in _SHARE_TARGET_KEYS:
            if isinstance(share.get(key), dict):
                target = share[key]
                break
        targets.append(target)
    return targets
