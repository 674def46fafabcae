"""Channel adapters for outbound notifications.

One adapter instance per channel per process. The recording fakes are the
only adapters wired in; a real email or push provider plugs in by
implementing ``EmailPort`` or ``PushPort`` and registering it here.
"""

from opinalocal.notification.notification import NotificationChannel

_adapters: dict[str, object] = {}


def get_channel(channel: str):
    """Return the adapter for ``channel`` ("Email" or "Push")."""
    if channel not in _adapters:
        if channel == NotificationChannel.EMAIL.value:
            from opinalocal.channel.fake_email import RecordingEmailAdapter

            _adapters[channel] = RecordingEmailAdapter()
        elif channel == NotificationChannel.PUSH.value:
            from opinalocal.channel.fake_push import RecordingPushAdapter

            _adapters[channel] = RecordingPushAdapter()
        else:
            raise ValueError(f"Unknown notification channel: {channel}")

    return _adapters[channel]


def reset_channels():
    """Drop every adapter so the next lookup starts clean. Used by tests."""
    _adapters.clear()
