"""Human readable titles, descriptions and label summaries for alerts."""

from alertcord.models.alert import Alert, AlertGroupNotification, sorted_pairs
from alertcord.sanitize import clean_text, is_empty_label_value, strip_substrings, truncate

DEFAULT_TITLE = "Alert Notification"
DEFAULT_GROUP_NAME = "Multiple Alerts"
MORE_LABELS_MARKER = "• ...and more"

MAX_TITLE_LENGTH = 250
MAX_DESCRIPTION_LENGTH = 1000
MAX_LABELS = 3
MAX_LABEL_VALUE_LENGTH = 25
MAX_GROUP_DESCRIPTION_LENGTH = 50

ICON_CRITICAL = "🔥"
ICON_WARNING = "⚠️"
ICON_INFO = "ℹ️"
ICON_RESOLVED = "💚"


def format_labels(labels: dict[str, str]) -> str:
    """Render up to three labels as bullet lines, alertname first.

    Returns an empty string when there is nothing worth showing, which callers
    take as a signal to omit the field.
    """
    lines: list[str] = []

    for name, value in sorted_pairs(labels):
        if len(lines) >= MAX_LABELS:
            lines.append(MORE_LABELS_MARKER)
            break

        value = value.strip()
        if is_empty_label_value(value):
            continue

        lines.append(f"• {name}: {truncate(value, MAX_LABEL_VALUE_LENGTH)}")

    result = "\n".join(lines).strip()
    if result == MORE_LABELS_MARKER:
        return ""
    return result


def alert_title(alert: Alert) -> str:
    summary = alert.summary.strip()
    name = alert.name.strip()

    if alert.summary:
        title = summary
    elif alert.name:
        title = name
    else:
        title = DEFAULT_TITLE

    severity = alert.severity.strip()
    if severity:
        title = f"{title} [{severity}]"

    title = strip_substrings(title.strip(), ("(instance )", "(instance)"))
    title = truncate(title, MAX_TITLE_LENGTH)
    return title or DEFAULT_TITLE


def alert_description(alert: Alert) -> str | None:
    text = alert.summary or alert.annotations.get("description", "")
    text = clean_text(text)
    if not text:
        return None
    return truncate(text, MAX_DESCRIPTION_LENGTH)


def status_icon(notification: AlertGroupNotification) -> str:
    if not notification.is_firing:
        return ICON_RESOLVED

    severity = notification.common_labels.get("severity", "")
    if severity == "critical":
        return ICON_CRITICAL
    if severity == "warning":
        return ICON_WARNING
    return ICON_INFO


def _first_line_summary(text: str) -> str:
    if len(text) > MAX_GROUP_DESCRIPTION_LENGTH:
        text = text.split("\n")[0]
        text = truncate(text, MAX_GROUP_DESCRIPTION_LENGTH)
    return text


def group_display_name(notification: AlertGroupNotification) -> str:
    """Name a whole alert group, prefixed with an icon for its status."""
    annotations = notification.common_annotations
    labels = notification.common_labels

    # Each candidate is chosen on its raw value; a chosen description keeps
    # its first line even when that line is blank.
    candidates = [
        (annotations.get("summary", ""), None),
        (annotations.get("message", ""), None),
        (annotations.get("description", ""), _first_line_summary),
        (labels.get("alertname", ""), None),
    ]
    if notification.alerts:
        first = notification.alerts[0]
        candidates.extend([(first.summary, None), (first.name, None)])

    name = DEFAULT_GROUP_NAME
    for value, render in candidates:
        if value:
            name = render(value) if render else value
            break
    return f"{status_icon(notification)} {name}"
