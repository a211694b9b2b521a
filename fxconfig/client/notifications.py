"""Client for transaction status notifications from the committer."""

from __future__ import annotations

import logging
import queue
import threading
from collections import deque
from dataclasses import dataclass
from typing import Callable, Protocol

from fxconfig.messages import NotificationRequest, NotificationResponse, Status

logger = logging.getLogger("fxconfig.client")


class ClientClosedError(RuntimeError):
    """Raised when the notification client has been closed."""


class NotificationStream(Protocol):
    """Bidirectional stream to the notification service."""

    def send(self, request: NotificationRequest) -> None: ...

    def recv(self) -> NotificationResponse: ...


class Notifier(Protocol):
    """Service that opens notification streams."""

    def open_notification_stream(self) -> NotificationStream: ...


@dataclass(eq=False)
class _Offer:
    item: NotificationRequest
    accepted: bool = False


class _Handoff:
    """Unbuffered hand-off: a sender waits until a receiver takes its item."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._offers: deque[_Offer] = deque()

    def offer(
        self,
        item: NotificationRequest,
        timeout: float | None,
        cancelled: threading.Event,
    ) -> None:
        entry = _Offer(item)
        with self._cond:
            self._offers.append(entry)
            self._cond.notify_all()
            self._cond.wait_for(lambda: entry.accepted or cancelled.is_set(), timeout)
            if entry.accepted:
                return
            self._offers.remove(entry)
        if cancelled.is_set():
            raise ClientClosedError("notification client is closed")
        raise TimeoutError("deadline exceeded")

    def take(self, stop: threading.Event) -> NotificationRequest | None:
        with self._cond:
            self._cond.wait_for(lambda: bool(self._offers) or stop.is_set())
            if stop.is_set():
                return None
            entry = self._offers.popleft()
            entry.accepted = True
            self._cond.notify_all()
            return entry.item

    def wake(self) -> None:
        with self._cond:
            self._cond.notify_all()


def parse_response(response: NotificationResponse) -> dict[str, int]:
    """Map transaction IDs to status codes; a status event overrides a timeout."""
    result = {tx_id: int(Status.STATUS_UNSPECIFIED) for tx_id in response.timeout_tx_ids}
    for event in response.tx_status_events:
        result[event.tx_id] = int(event.status)
    return result


def wait(subscription: queue.Queue[int], timeout: float | None) -> int:
    """Block until a status arrives on the subscription or the timeout expires."""
    if timeout is not None and timeout <= 0:
        raise TimeoutError("deadline exceeded")
    try:
        return subscription.get(timeout=timeout)
    except queue.Empty:
        raise TimeoutError("deadline exceeded") from None


class NotificationClient:
    """Receives transaction status notifications and fans them out to subscribers.

    Several subscribers of one transaction ID share a single upstream request.
    """

    def __init__(
        self,
        notifier: Notifier | None,
        waiting_timeout: float,
        on_close: Callable[[], None] | None = None,
        start: bool = True,
    ) -> None:
        self.waiting_timeout = waiting_timeout
        self._notifier = notifier
        self._on_close = on_close
        self._requests = _Handoff()
        self._subscribers: dict[str, list[queue.Queue[int]]] = {}
        self._lock = threading.Lock()
        self._session_lock = threading.Lock()
        self._session_done: threading.Event | None = None
        self._stream_error: BaseException | None = None
        self._closed = threading.Event()
        if notifier is not None and start:
            threading.Thread(
                target=self._run_listener, name="fxconfig-notifications", daemon=True
            ).start()

    def _run_listener(self) -> None:
        try:
            self.listen()
        except Exception as exc:  # noqa: BLE001 - background thread reports and exits
            logger.error("Notification listener stream terminated unexpectedly: %s", exc)

    def close(self) -> None:
        """Stop the listener and release the connection."""
        self._closed.set()
        self._requests.wake()
        with self._session_lock:
            done = self._session_done
        if done is not None:
            done.set()
            self._requests.wake()
        if self._on_close is not None:
            self._on_close()

    def subscribe(self, tx_id: str) -> queue.Queue[int]:
        """Register interest in a transaction's status and return its subscription."""
        if self._stream_error is not None:
            raise self._stream_error
        if self._closed.is_set():
            raise ClientClosedError("notification client is closed")

        subscription: queue.Queue[int] = queue.Queue(maxsize=1)
        with self._lock:
            receivers = self._subscribers.setdefault(tx_id, [])
            receivers.append(subscription)
            if len(receivers) > 1:
                return subscription

            request = NotificationRequest(tx_ids=[tx_id], timeout=self.waiting_timeout)
            try:
                self._requests.offer(request, self.waiting_timeout, self._closed)
            except BaseException:
                remaining = [r for r in receivers if r is not subscription]
                if remaining:
                    self._subscribers[tx_id] = remaining
                else:
                    self._subscribers.pop(tx_id, None)
                raise
        return subscription

    def wait_for_event(self, subscription: queue.Queue[int]) -> int:
        """Wait for the status of a subscription within the waiting timeout."""
        return wait(subscription, self.waiting_timeout)

    def listen(self) -> None:
        """Run the notification stream until the client is closed or the stream fails."""
        if self._notifier is None:
            raise ValueError("require client")
        try:
            stream = self._notifier.open_notification_stream()
        except Exception as exc:
            self._stream_error = exc
            raise

        done = threading.Event()
        failures: list[BaseException] = []
        guard = threading.Lock()

        def fail(exc: BaseException) -> None:
            with guard:
                if not failures:
                    failures.append(exc)
            done.set()
            self._requests.wake()

        with self._session_lock:
            self._session_done = done
        if self._closed.is_set():
            done.set()

        def receive() -> None:
            while not done.is_set():
                try:
                    response = stream.recv()
                except Exception as exc:  # noqa: BLE001 - ends the session
                    if not done.is_set():
                        fail(exc)
                    return
                self._dispatch(response)

        def send() -> None:
            while True:
                request = self._requests.take(done)
                if request is None:
                    return
                try:
                    stream.send(request)
                except Exception as exc:  # noqa: BLE001 - ends the session
                    fail(exc)
                    return

        receiver = threading.Thread(target=receive, daemon=True)
        sender = threading.Thread(target=send, daemon=True)
        receiver.start()
        sender.start()

        done.wait()
        self._requests.wake()
        close_stream = getattr(stream, "close", None)
        if callable(close_stream):
            try:
                close_stream()
            except Exception as exc:  # noqa: BLE001 - already shutting down
                logger.debug("closing notification stream failed: %s", exc)
        sender.join()

        with self._lock:
            self._subscribers.clear()
        with self._session_lock:
            self._session_done = None

        if failures:
            self._stream_error = failures[0]
            raise failures[0]

    def _dispatch(self, response: NotificationResponse) -> None:
        statuses = parse_response(response)
        with self._lock:
            notifications = [
                (receiver, status)
                for tx_id, status in statuses.items()
                for receiver in self._subscribers.pop(tx_id, ())
            ]
        for receiver, status in notifications:
            try:
                receiver.put_nowait(status)
            except queue.Full:
                pass