"""リーダー/ライターロック付きインメモリキャッシュ"""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class ReadWriteLock:
    """複数リーダー・単一ライターのロック。

    ライターが待機している間は新しいリーダーを受け付けない（ライター優先）。
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """読み取りロックを保持するコンテキスト。"""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """書き込みロックを保持するコンテキスト。"""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class LockedCache(Generic[K, V]):
    """ReadWriteLock で保護された辞書キャッシュ。プロセス内のみ・永続化なし。"""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._entries: dict[K, V] = {}

    def get(self, key: K) -> V | None:
        """キーに対応する値を取得する。存在しなければ None。"""
        with self._lock.read():
            return self._entries.get(key)

    def put(self, key: K, value: V) -> V:
        """値を登録し、キャッシュに残った値を返す。

        書き込みロック取得後に再確認し、並行する別の呼び出しが先に登録して
        いればその値を残す。
        """
        with self._lock.write():
            resident = self._entries.get(key)
            if resident is not None:
                return resident
            self._entries[key] = value
            return value

    def clear(self) -> None:
        with self._lock.write():
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)
