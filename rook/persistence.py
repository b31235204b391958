"""Key-value persistence for the scorekeeper state.

Every state field lives under its own key as JSON text. Loading decodes each
key on its own: a missing or unreadable value falls back to that field's
default without affecting the others.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Annotated, Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .hand import deserialize_hand, serialize_hand
from .normalize import normalize
from .state import PendingBid, ScorekeeperState

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "rook_"

Seat = Annotated[int, Field(ge=0, le=3)]


class KeyValueStore(Protocol):
    """Textual key-value storage."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def set_many(self, items: Mapping[str, str]) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dictionary-backed store for tests and per-session servers."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class JsonFileStore:
    """Keeps every key in a single JSON object on disk.

    Writes go through a temp file in the same directory followed by a
    rename, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read %s, starting from an empty store", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: top level is not an object", self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp", prefix=".rook_")
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                json.dump(data, f, indent=2, sort_keys=True)
            Path(tmp_path).replace(self.path)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def set_many(self, items: Mapping[str, str]) -> None:
        """Write several keys with a single replace of the file."""
        data = self._read_all()
        data.update(items)
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)


class _StoredPendingBid(BaseModel):
    bid: Any = 0
    bidder: Seat


def _decode_hands(payload: List[Any]) -> Tuple:
    return tuple(deserialize_hand(item) for item in payload)


def _decode_pending(payload: Optional[_StoredPendingBid]) -> Optional[PendingBid]:
    if payload is None:
        return None
    return PendingBid(bid=normalize(payload.bid), bidder=payload.bidder)


def _encode_pending(pending: Optional[PendingBid]) -> Optional[dict]:
    if pending is None:
        return None
    return {"bid": pending.bid, "bidder": pending.bidder}


@dataclass(frozen=True)
class StoredField:
    key: str
    attr: str
    adapter: TypeAdapter
    decode: Callable[[Any], Any] = lambda value: value
    encode: Callable[[Any], Any] = lambda value: value


STORED_FIELDS: Tuple[StoredField, ...] = (
    StoredField("players", "players", TypeAdapter(Tuple[str, str, str, str]), encode=list),
    StoredField("team_names", "team_names", TypeAdapter(Tuple[str, str]), encode=list),
    StoredField("starting_dealer", "starting_dealer", TypeAdapter(Seat)),
    StoredField("dealer_locked", "dealer_locked", TypeAdapter(bool)),
    StoredField(
        "rounds",
        "hands",
        TypeAdapter(List[Any]),
        decode=_decode_hands,
        encode=lambda hands: [serialize_hand(hand) for hand in hands],
    ),
    StoredField(
        "pending_hand",
        "pending_bid",
        TypeAdapter(Optional[_StoredPendingBid]),
        decode=_decode_pending,
        encode=_encode_pending,
    ),
    StoredField("next_dealer_manual", "next_dealer_manual", TypeAdapter(bool)),
    StoredField("next_dealer_index", "next_dealer_index", TypeAdapter(Seat)),
    StoredField("show_setup", "show_setup", TypeAdapter(bool)),
)


def load_state(store: KeyValueStore, prefix: str = DEFAULT_PREFIX) -> ScorekeeperState:
    """Rebuild the state from ``store``, defaulting any key that fails to decode."""
    state = ScorekeeperState()
    updates: Dict[str, Any] = {}
    for stored in STORED_FIELDS:
        key = prefix + stored.key
        raw = store.get(key)
        if raw is None:
            continue
        try:
            value = stored.adapter.validate_python(json.loads(raw))
            updates[stored.attr] = stored.decode(value)
        except (ValueError, TypeError, ValidationError) as exc:
            logger.warning("Falling back to default for %s: %s", key, exc)
    return replace(state, **updates)


def save_state(store: KeyValueStore, state: ScorekeeperState, prefix: str = DEFAULT_PREFIX) -> None:
    """Write every field in one batch so the saved keys never disagree."""
    store.set_many(
        {prefix + stored.key: json.dumps(stored.encode(getattr(state, stored.attr))) for stored in STORED_FIELDS}
    )


def clear_state(store: KeyValueStore, prefix: str = DEFAULT_PREFIX) -> None:
    for stored in STORED_FIELDS:
        store.delete(prefix + stored.key)
