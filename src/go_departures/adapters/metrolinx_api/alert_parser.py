"""Parser for Metrolinx service alert responses."""

import hashlib
import logging
from typing import Any

from go_departures.adapters.metrolinx_api.payload import as_list, dig, first_text
from go_departures.domain.models import AlertSeverity, ServiceAlert

logger = logging.getLogger(__name__)

DEFAULT_ALERT_TITLE = "Service Alert"


class AlertParser:
    """Parses service alert messages into ServiceAlert records."""

    @staticmethod
    def _messages(data: Any) -> list[Any]:
        """Locate the message list, which may sit at several paths."""
        for path in (("Messages",), ("ServiceAlerts", "Messages")):
            messages = dig(data, *path)
            if messages is None:
                continue
            # Some revisions wrap the list as {"Message": [...]}
            if isinstance(messages, dict) and "Message" in messages:
                messages = messages["Message"]
            return as_list(messages)
        return []

    @staticmethod
    def _codes(items: Any) -> list[str]:
        codes = []
        for item in as_list(items):
            if isinstance(item, dict):
                code = first_text(item, "LineCode", "StopCode", "Code")
            else:
                code = str(item) if item is not None else ""
            if code:
                codes.append(code)
        return codes

    @staticmethod
    def _affected_routes(msg: dict[str, Any]) -> tuple[str, ...]:
        """Collect line codes (first non-empty candidate) and station codes."""
        line_codes: list[str] = []
        for key in ("AssociatedLines", "Lines", "Routes"):
            line_codes = AlertParser._codes(msg.get(key))
            if line_codes:
                break

        stop_codes: list[str] = []
        for key in ("AssociatedStops", "Stops"):
            stop_codes = AlertParser._codes(msg.get(key))
            if stop_codes:
                break

        return tuple(dict.fromkeys(line_codes + stop_codes))

    @staticmethod
    def derive_severity(msg: dict[str, Any]) -> AlertSeverity:
        """Derive severity from category, subcategory and priority.

        Disruption category, suspension subcategory or High priority is severe;
        Medium priority or a delay subcategory is a warning; anything else is info.
        """
        category = first_text(msg, "Category").lower()
        sub_category = first_text(msg, "SubCategory").lower()
        priority = first_text(msg, "Priority")

        if "disruption" in category or "suspension" in sub_category or priority == "High":
            return "severe"
        if priority == "Medium" or "delay" in sub_category:
            return "warning"
        return "info"

    @staticmethod
    def _alert_id(msg: dict[str, Any], title: str, description: str) -> str:
        alert_id = first_text(msg, "Code", "MessageId", "Id")
        if alert_id:
            return alert_id
        digest = hashlib.sha1(f"{title}\n{description}".encode()).hexdigest()
        return f"alert-{digest[:12]}"

    @staticmethod
    def parse_alerts(data: Any) -> list[ServiceAlert]:
        """Parse a service alert response.

        Args:
            data: Decoded JSON from the service alert endpoint.

        Returns:
            All alerts in feed order. Non-object messages are skipped.
        """
        alerts = []
        for msg in AlertParser._messages(data):
            if not isinstance(msg, dict):
                logger.debug(f"Skipping malformed alert message: {msg!r}")
                continue
            title = first_text(msg, "SubjectEnglish", "Subject", "Title") or DEFAULT_ALERT_TITLE
            description = first_text(msg, "BodyEnglish", "Body", "Description")
            alerts.append(
                ServiceAlert(
                    id=AlertParser._alert_id(msg, title, description),
                    title=title,
                    description=description,
                    severity=AlertParser.derive_severity(msg),
                    affected_routes=AlertParser._affected_routes(msg),
                )
            )
        return alerts
