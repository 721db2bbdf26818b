"""Notification dispatcher fanning incidents out to channels.

``notify`` returns immediately. Each channel active on the target runs as
an independent task on its own daemon thread, so a slow relay on one
incident cannot block another and a hung network call blocks only the task
that issued it. Nothing propagates back to the caller. Outcomes are visible
only in logs, the email counters and, for callers that want them, the
futures returned by ``dispatch``.

Setting ``NOTIFY_MAX_WORKERS`` (or passing an executor) bounds concurrency
instead; tasks beyond the bound then queue behind running ones.

Usage Example:
    from notifier.notifications import NotificationDispatcher

    dispatcher = NotificationDispatcher()
    dispatcher.notify(incident, target)

    # Wait for completion when needed (tests, shutdown hooks)
    for future in dispatcher.dispatch(incident, target):
        result = future.result()
"""

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import List, Optional, Set

import structlog

from notifier.configuration import Settings, get_settings
from notifier.logging import bind_notification_context, get_correlation_id
from notifier.models import IncidentState, NotificationTarget
from notifier.notifications.channels.base import NotificationChannel
from notifier.notifications.channels.console import ConsoleChannel
from notifier.notifications.channels.email import EmailChannel
from notifier.notifications.channels.http import GetChannel, PostChannel
from notifier.notifications.metrics import EmailMetrics, PrometheusEmailMetrics
from notifier.notifications.models import NotificationResult, NotificationStatus

logger = structlog.get_logger()


class NotificationDispatcher:
    """Fire-and-forget multi-channel dispatcher.

    Attributes:
        channels: Channels checked, in order, for every notification
        metrics: Email counter handle (None when custom channels are given
            without one)

    Example:
        dispatcher = NotificationDispatcher(
            settings=settings,
            metrics=PrometheusEmailMetrics(registry=registry),
        )
        dispatcher.notify(incident, target)
    """

    def __init__(
        self,
        channels: Optional[List[NotificationChannel]] = None,
        settings: Optional[Settings] = None,
        metrics: Optional[EmailMetrics] = None,
        executor: Optional[Executor] = None,
    ):
        """Initialize the dispatcher.

        Args:
            channels: Channel instances. Defaults to email, post, get and
                print channels built from ``settings``.
            settings: Settings instance. Defaults to ``get_settings()``.
            metrics: Email counter handle. Defaults to a
                PrometheusEmailMetrics with a private registry.
            executor: Executor for channel tasks. When omitted, a
                ThreadPoolExecutor is created lazily if NOTIFY_MAX_WORKERS is
                set, and every task gets its own thread otherwise.
        """
        settings = settings or get_settings()
        if channels is None:
            if metrics is None:
                metrics = PrometheusEmailMetrics(
                    namespace=settings.notifications.METRICS_NAMESPACE
                )
            http_timeout = settings.notifications.HTTP_TIMEOUT
            channels = [
                EmailChannel(settings.smtp, metrics),
                PostChannel(timeout=http_timeout),
                GetChannel(timeout=http_timeout),
                ConsoleChannel(),
            ]

        self.channels = channels
        self.metrics = metrics
        self._max_workers = settings.notifications.NOTIFY_MAX_WORKERS
        self._executor = executor
        self._threads: Set[threading.Thread] = set()
        self._lock = threading.Lock()
        self._shutdown = False

        logger.info(
            "initialized_notification_dispatcher",
            channels=[c.channel_name for c in channels],
            max_workers=self._max_workers,
        )

    def notify(self, incident: IncidentState, target: NotificationTarget) -> None:
        """Notify every channel configured on ``target``. Never blocks or raises."""
        self.dispatch(incident, target)

    def dispatch(
        self, incident: IncidentState, target: NotificationTarget
    ) -> List["Future[NotificationResult]"]:
        """Start one task per active channel.

        Returns:
            One future per started task; each resolves to the channel's
            NotificationResult and never raises. Empty when no channel is
            active or the dispatcher has been shut down.
        """
        active = [c for c in self.channels if c.is_active(target)]
        if not active:
            logger.debug(
                "no_active_channels",
                alert_key=incident.alert_key,
                notification=target.name,
            )
            return []

        with self._lock:
            if self._shutdown:
                logger.warning(
                    "dispatcher_shut_down",
                    alert_key=incident.alert_key,
                    notification=target.name,
                )
                return []

            logger.info(
                "dispatching_notification",
                alert_key=incident.alert_key,
                notification=target.name,
                channels=[c.channel_name for c in active],
            )
            executor = self._get_or_create_executor()
            if executor is not None:
                return [
                    executor.submit(self._run_channel, channel, incident, target)
                    for channel in active
                ]
            return [self._start_thread(channel, incident, target) for channel in active]

    def _start_thread(
        self,
        channel: NotificationChannel,
        incident: IncidentState,
        target: NotificationTarget,
    ) -> "Future[NotificationResult]":
        """Run one channel task on a new daemon thread. Caller holds the lock."""
        future: "Future[NotificationResult]" = Future()
        future.set_running_or_notify_cancel()
        thread = threading.Thread(
            target=self._run_on_thread,
            args=(future, channel, incident, target),
            name=f"notifier-{channel.channel_name}",
            daemon=True,
        )
        self._threads.add(thread)
        thread.start()
        return future

    def _run_on_thread(
        self,
        future: "Future[NotificationResult]",
        channel: NotificationChannel,
        incident: IncidentState,
        target: NotificationTarget,
    ) -> None:
        try:
            future.set_result(self._run_channel(channel, incident, target))
        finally:
            with self._lock:
                self._threads.discard(threading.current_thread())

    def _run_channel(
        self,
        channel: NotificationChannel,
        incident: IncidentState,
        target: NotificationTarget,
    ) -> NotificationResult:
        """Worker wrapper running one channel and containing its errors."""
        with bind_notification_context(
            alert_key=incident.alert_key,
            channel=channel.channel_name,
            notification=target.name,
        ):
            try:
                result = channel.send(incident, target)
            except Exception as e:
                logger.exception(
                    "channel_task_failed",
                    channel=channel.channel_name,
                    alert_key=incident.alert_key,
                    error=str(e),
                )
                result = NotificationResult(
                    channel=channel.channel_name,
                    status=NotificationStatus.FAILED,
                    message=f"Channel exception: {e}",
                    alert_key=incident.alert_key,
                    notification=target.name,
                    error_code="CHANNEL_EXCEPTION",
                )
            return result.model_copy(update={"correlation_id": get_correlation_id()})

    def _get_or_create_executor(self) -> Optional[Executor]:
        """Executor for bounded dispatch, or None for a thread per task.

        Caller holds the lock.
        """
        if self._executor is None and self._max_workers is not None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="notifier",
            )
            logger.debug("created_notification_executor", max_workers=self._max_workers)
        return self._executor

    def shutdown(self, wait: bool = True) -> None:
        """Refuse further notifications and release running tasks.

        Idempotent.

        Args:
            wait: If True, wait for pending channel tasks to complete.
        """
        with self._lock:
            executor, self._executor = self._executor, None
            threads = list(self._threads)
            self._shutdown = True
        if executor is not None:
            executor.shutdown(wait=wait)
        if wait:
            for thread in threads:
                thread.join()
        logger.debug("notification_dispatcher_shut_down", wait=wait, pending=len(threads))

    def __enter__(self) -> "NotificationDispatcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown(wait=True)
