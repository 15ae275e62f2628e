"""
Payload-less change broadcasts delivered to every listening process.

Three buses share one small protocol: an in-process emitter, the macOS
distributed notification center, and a watched stamp file for platforms
without one.
"""

from __future__ import annotations

import itertools
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

from PySide6.QtCore import QFileSystemWatcher, QObject

from quote_saver.quote_saver import logger as app_logger

try:
    import objc
    from Foundation import NSDistributedNotificationCenter, NSObject
except ImportError:  # pragma: no cover - non-macOS environments
    objc = None
    NSDistributedNotificationCenter = None
    NSObject = None

_LOGGER = app_logger.get_logger()

BROADCAST_NAME = "QuoteSaverPreferencesChanged"
DEFAULT_BROADCAST_DIR = Path.home() / ".config" / "QuoteSaver" / "broadcast"

# NSNotificationSuspensionBehaviorDeliverImmediately
_DELIVER_IMMEDIATELY = 4

Callback = Callable[[], None]


@dataclass(frozen=True)
class Subscription:
    name: str
    token: int


class BroadcastBus(Protocol):
    def post(self, name: str) -> None:
        ...

    def subscribe(self, name: str, callback: Callback) -> Subscription:
        ...

    def unsubscribe(self, subscription: Subscription) -> None:
        ...


def _deliver(name: str, callback: Callback) -> None:
    try:
        callback()
    except Exception:
        _LOGGER.exception("Broadcast listener for {} failed.", name)


class LocalBroadcastBus:
    """Synchronous in-process emitter; each post reaches each listener once."""

    def __init__(self) -> None:
        self._listeners: Dict[str, Dict[int, Callback]] = {}
        self._tokens = itertools.count(1)

    def post(self, name: str) -> None:
        for callback in list(self._listeners.get(name, {}).values()):
            _deliver(name, callback)

    def subscribe(self, name: str, callback: Callback) -> Subscription:
        token = next(self._tokens)
        self._listeners.setdefault(name, {})[token] = callback
        return Subscription(name=name, token=token)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._listeners.get(subscription.name, {}).pop(subscription.token, None)

    def listener_count(self, name: str) -> int:
        return len(self._listeners.get(name, {}))


if NSObject is not None:

    class _NotificationObserver(NSObject):
        def initWithCallback_(self, callback):
            self = objc.super(_NotificationObserver, self).init()
            if self is None:
                return None
            self._callback = callback
            return self

        def notificationReceived_(self, notification):
            self._callback()


class DistributedBroadcastBus:
    """Bridge to NSDistributedNotificationCenter (macOS only)."""

    def __init__(self, center=None) -> None:
        if center is None:
            if NSDistributedNotificationCenter is None:
                raise RuntimeError("PyObjC Foundation bindings are not available.")
            center = NSDistributedNotificationCenter.defaultCenter()
        self._center = center
        self._observers: Dict[int, object] = {}
        self._tokens = itertools.count(1)

    def post(self, name: str) -> None:
        self._center.postNotificationName_object_userInfo_deliverImmediately_(name, None, None, True)

    def subscribe(self, name: str, callback: Callback) -> Subscription:
        observer = _NotificationObserver.alloc().initWithCallback_(lambda: _deliver(name, callback))
        self._center.addObserver_selector_name_object_suspensionBehavior_(
            observer,
            "notificationReceived:",
            name,
            None,
            _DELIVER_IMMEDIATELY,
        )
        token = next(self._tokens)
        self._observers[token] = observer
        return Subscription(name=name, token=token)

    def unsubscribe(self, subscription: Subscription) -> None:
        observer = self._observers.pop(subscription.token, None)
        if observer is not None:
            self._center.removeObserver_(observer)


class FileBroadcastBus(QObject):
    """
    Broadcasts by rewriting a stamp file that every listening process watches.

    The stamp lives in a per-user directory shared by all processes, so a post
    from the configuration process reaches surfaces running elsewhere.
    """

    def __init__(self, directory: Optional[Path] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._directory = Path(directory or DEFAULT_BROADCAST_DIR)
        self._watcher = QFileSystemWatcher(self)
        self._watcher.fileChanged.connect(self._on_file_changed)  # type: ignore[arg-type]
        self._listeners: Dict[str, Dict[int, Callback]] = {}
        self._tokens = itertools.count(1)

    @property
    def directory(self) -> Path:
        return self._directory

    def stamp_path(self, name: str) -> Path:
        return self._directory / f"{name}.stamp"

    def post(self, name: str) -> None:
        stamp = self.stamp_path(name)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            stamp.write_text(f"{time.time_ns()}\n", encoding="utf-8")
        except OSError as exc:
            _LOGGER.warning("Failed to post broadcast {} via {}: {}", name, stamp, exc)

    def subscribe(self, name: str, callback: Callback) -> Subscription:
        stamp = self._ensure_stamp(name)
        if stamp is not None and str(stamp) not in self._watcher.files():
            self._watcher.addPath(str(stamp))
        token = next(self._tokens)
        self._listeners.setdefault(name, {})[token] = callback
        return Subscription(name=name, token=token)

    def unsubscribe(self, subscription: Subscription) -> None:
        listeners = self._listeners.get(subscription.name, {})
        listeners.pop(subscription.token, None)
        if not listeners:
            self._watcher.removePath(str(self.stamp_path(subscription.name)))

    def _ensure_stamp(self, name: str) -> Optional[Path]:
        stamp = self.stamp_path(name)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            if not stamp.exists():
                stamp.touch()
        except OSError as exc:
            _LOGGER.warning("Cannot watch broadcast stamp {}: {}", stamp, exc)
            return None
        return stamp

    def _on_file_changed(self, path: str) -> None:
        name = Path(path).name[: -len(".stamp")]
        # Some editors and filesystems replace the file, which drops the watch.
        if path not in self._watcher.files() and Path(path).exists():
            self._watcher.addPath(path)
        for callback in list(self._listeners.get(name, {}).values()):
            _deliver(name, callback)


def create_default_bus() -> BroadcastBus:
    """Return the cross-process bus suited to the running platform."""
    if sys.platform == "darwin" and NSDistributedNotificationCenter is not None:
        return DistributedBroadcastBus()
    return FileBroadcastBus()
