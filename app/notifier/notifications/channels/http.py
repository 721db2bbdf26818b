"""HTTP notification channels (POST and GET)."""

from typing import Any, Optional

import requests
import structlog

from notifier.exceptions import TemplateRenderError
from notifier.models import IncidentState, NotificationTarget
from notifier.notifications.channels.base import NotificationChannel
from notifier.notifications.message import render_payload
from notifier.notifications.models import NotificationResult, NotificationStatus
from notifier.operations import classify_delivery_error

logger = structlog.get_logger()


class HTTPChannel(NotificationChannel):
    """Shared plumbing for the POST and GET channels.

    A response status of 300 or above is logged as a failure; it never
    raises.

    Args:
        session: Object with ``requests``-style ``get``/``post`` methods.
            Defaults to the ``requests`` module, so each call uses its own
            connection.
        timeout: Request timeout in seconds; None imposes no deadline.
    """

    def __init__(self, session: Optional[Any] = None, timeout: Optional[float] = None):
        self._http = session if session is not None else requests
        self._timeout = timeout

    def _request_failed(
        self, incident: IncidentState, target: NotificationTarget, url: str, exc: Exception
    ) -> NotificationResult:
        classification = classify_delivery_error(exc)
        logger.error(
            f"{self.channel_name}_notification_failed",
            alert_key=incident.alert_key,
            url=url,
            error=str(exc),
        )
        return self._result(
            incident,
            target,
            NotificationStatus.FAILED,
            classification.message,
            error_code=classification.error_code,
        )

    def _check_response(
        self,
        incident: IncidentState,
        target: NotificationTarget,
        url: str,
        response: requests.Response,
    ) -> NotificationResult:
        if response.status_code >= 300:
            logger.error(
                f"{self.channel_name}_notification_bad_response",
                alert_key=incident.alert_key,
                url=url,
                status_code=response.status_code,
                reason=response.reason,
            )
            return self._result(
                incident,
                target,
                NotificationStatus.FAILED,
                f"bad response on notification {self.channel_name}: "
                f"{response.status_code} {response.reason}",
                error_code="BAD_RESPONSE",
                status_code=response.status_code,
            )

        logger.info(
            f"{self.channel_name}_notification_sent",
            alert_key=incident.alert_key,
            url=url,
            status_code=response.status_code,
        )
        return self._result(
            incident,
            target,
            NotificationStatus.SENT,
            f"{self.channel_name} notification successful",
            status_code=response.status_code,
        )


class PostChannel(HTTPChannel):
    """POSTs the selected payload to ``target.post``."""

    @property
    def channel_name(self) -> str:
        return "post"

    def is_active(self, target: NotificationTarget) -> bool:
        return target.post is not None

    def send(
        self, incident: IncidentState, target: NotificationTarget
    ) -> NotificationResult:
        url = str(target.post)
        try:
            payload = render_payload(incident, target)
        except TemplateRenderError as exc:
            logger.error(
                "post_template_failed",
                alert_key=incident.alert_key,
                notification=target.name,
                error=str(exc),
            )
            return self._result(
                incident,
                target,
                NotificationStatus.FAILED,
                str(exc),
                error_code="TEMPLATE_ERROR",
            )

        try:
            response = self._http.post(
                url,
                data=payload.encode("utf-8"),
                headers={"Content-Type": target.content_type},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            return self._request_failed(incident, target, url, exc)

        try:
            return self._check_response(incident, target, url, response)
        finally:
            response.close()


class GetChannel(HTTPChannel):
    """GETs ``target.get``."""

    @property
    def channel_name(self) -> str:
        return "get"

    def is_active(self, target: NotificationTarget) -> bool:
        return target.get is not None

    def send(
        self, incident: IncidentState, target: NotificationTarget
    ) -> NotificationResult:
        url = str(target.get)
        try:
            response = self._http.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            return self._request_failed(incident, target, url, exc)

        try:
            return self._check_response(incident, target, url, response)
        finally:
            response.close()
