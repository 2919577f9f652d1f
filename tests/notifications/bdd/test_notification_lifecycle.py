"""BDD tests for the notification lifecycle."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/notification_lifecycle.feature")


@when("the email is delivered")
def delivered(notification):
    notification.mark_sent(message_id="email-1")


@when(parsers.re(r"delivery fails (?P<times>\d+) times?"), converters={"times": int})
def fails(notification, times):
    for attempt in range(times):
        if attempt:
            notification.retry()
        notification.mark_failed("Mailbox unavailable")


@when("the email is retried")
def retried(notification, error):
    try:
        notification.retry()
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse("the notification is {status}"))
def status_is(notification, status):
    assert notification.status == status


@then("the retry is refused")
def refused(error):
    assert isinstance(error["exc"], ValidationError)
