"""Channel adapter registry: pluggable notification dispatch channels.

Uses the fake email adapter by default; the SendGrid adapter is selected
when ``SENDGRID_API_KEY`` is configured.
"""

from storefront.config import get_settings
from storefront.notifications.notification.notification import NotificationChannel

_channel_instances: dict[str, object] = {}


def get_channel(channel_type: str):
    """Return the configured channel adapter (singleton per channel type).

    Args:
        channel_type: One of NotificationChannel enum values ("Email")
    """
    if channel_type not in _channel_instances:
        if channel_type == NotificationChannel.EMAIL.value:
            settings = get_settings()
            if settings.sendgrid_api_key:
                from storefront.notifications.channel.sendgrid_email import SendGridEmailAdapter

                _channel_instances[channel_type] = SendGridEmailAdapter(
                    api_key=settings.sendgrid_api_key,
                    from_email=settings.from_email,
                    from_name=settings.store_name,
                )
            else:
                from storefront.notifications.channel.fake_email import FakeEmailAdapter

                _channel_instances[channel_type] = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def set_channel(channel_type: str, adapter) -> None:
    """Install a specific adapter (useful for testing)."""
    _channel_instances[channel_type] = adapter


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
