"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/catalog.py
============================================================
Class: InMemoryCatalog

Responsibilities:
  - Hacer de "base de datos" en memoria para tests / local dev.
  - Guardar cuentas, videos, canales, playlists, ratings y el follow graph
    del servidor (cuentas/canales remotos seguidos).

Collaborators:
  - InMemoryAccountRepository
  - InMemoryQueryExecutor

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - snapshot() devuelve copias: los lectores no ven escrituras a medias.
============================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Dict, FrozenSet, Iterable, Tuple

from ....domain.entities import (
    Account,
    AccountVideoRate,
    Video,
    VideoChannel,
    VideoPlaylist,
)


@dataclass(frozen=True)
class CatalogSnapshot:
    accounts: Tuple[Account, ...]
    videos: Tuple[Video, ...]
    channels: Tuple[VideoChannel, ...]
    playlists: Tuple[VideoPlaylist, ...]
    rates: Tuple[AccountVideoRate, ...]
    followed_account_ids: FrozenSet[int]
    followed_channel_ids: FrozenSet[int]


class InMemoryCatalog:
    def __init__(self) -> None:
        self._lock = Lock()
        self._accounts: Dict[int, Account] = {}
        self._videos: Dict[int, Video] = {}
        self._channels: Dict[int, VideoChannel] = {}
        self._playlists: Dict[int, VideoPlaylist] = {}
        self._rates: Dict[int, AccountVideoRate] = {}
        self._followed_account_ids: set[int] = set()
        self._followed_channel_ids: set[int] = set()

    # =========================================================
    # Escritura (seed)
    # =========================================================
    def add_accounts(self, *accounts: Account) -> None:
        with self._lock:
            self._accounts.update((a.id, a) for a in accounts)

    def add_videos(self, *videos: Video) -> None:
        with self._lock:
            self._videos.update((v.id, v) for v in videos)

    def add_channels(self, *channels: VideoChannel) -> None:
        with self._lock:
            self._channels.update((c.id, c) for c in channels)

    def add_playlists(self, *playlists: VideoPlaylist) -> None:
        with self._lock:
            self._playlists.update((p.id, p) for p in playlists)

    def add_rates(self, *rates: AccountVideoRate) -> None:
        with self._lock:
            self._rates.update((r.id, r) for r in rates)

    def follow(
        self,
        *,
        account_ids: Iterable[int] = (),
        channel_ids: Iterable[int] = (),
    ) -> None:
        """Marca cuentas/canales remotos como seguidos por el servidor."""
        with self._lock:
            self._followed_account_ids.update(account_ids)
            self._followed_channel_ids.update(channel_ids)

    def clear(self) -> None:
        with self._lock:
            self._accounts.clear()
            self._videos.clear()
            self._channels.clear()
            self._playlists.clear()
            self._rates.clear()
            self._followed_account_ids.clear()
            self._followed_channel_ids.clear()

    # =========================================================
    # Lectura
    # =========================================================
    def snapshot(self) -> CatalogSnapshot:
        with self._lock:
            return CatalogSnapshot(
                accounts=tuple(self._accounts.values()),
                videos=tuple(self._videos.values()),
                channels=tuple(self._channels.values()),
                playlists=tuple(self._playlists.values()),
                rates=tuple(self._rates.values()),
                followed_account_ids=frozenset(self._followed_account_ids),
                followed_channel_ids=frozenset(self._followed_channel_ids),
            )
