"""Text formatting utilities."""

from typing import List

from watchqueue.core.queue import QueueItem, QueueSnapshot
from watchqueue.helpers.localization import get_text


def format_duration(seconds: int) -> str:
    """Format duration in seconds to readable format."""
    if seconds < 0:
        return "00:00"

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    seconds = seconds % 60

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def format_title(title: str, max_length: int = 50) -> str:
    """Format item title with max length."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def format_item(item: QueueItem) -> str:
    label = format_title(item.title) if item.title else item.handle
    if item.duration:
        label = f"{label} [{format_duration(item.duration)}]"
    return f"🎬 {label} ({item.submitter_name})"


def format_queue(snapshot: QueueSnapshot) -> str:
    """Render the /queue listing: current item marked with >, pending with -."""
    lines: List[str] = [get_text("queue_title"), ""]
    if snapshot.current is not None:
        lines.append(f"> {format_item(snapshot.current)}")
    for item in snapshot.pending:
        lines.append(f"- {format_item(item)}")
    if snapshot.current is None and not snapshot.pending:
        lines.append(get_text("queue_empty"))

    status = get_text("status_playing") if snapshot.playing else get_text("status_idle")
    lines.append("")
    lines.append(get_text("status_line", status=status))
    return "\n".join(lines)
