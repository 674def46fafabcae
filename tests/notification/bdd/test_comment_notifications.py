"""BDD tests for comment notifications."""

from protean.utils.globals import current_domain
from pytest_bdd import parsers, scenarios, then, when

from opinalocal.channel import get_channel
from opinalocal.comment.management import AddComment
from opinalocal.comment.queries import comments_for_review
from opinalocal.notification.notification import Notification, NotificationType
from opinalocal.utils.queries import fetch_all

scenarios("features/comment_notifications.feature")


def _comment_notifications_to(user_id):
    return [
        n
        for n in fetch_all(Notification, recipient_id=user_id)
        if n.notification_type == NotificationType.NEW_COMMENT.value
    ]


@when(parsers.cfparse('"{name}" comments "{text}" on the review'))
def comment(people, review_id, name, text):
    current_domain.process(AddComment(review_id=review_id, user_id=people[name], text=text), asynchronous=False)


@then(parsers.cfparse('"{name}" receives {count:d} comment notification'))
@then(parsers.cfparse('"{name}" receives {count:d} comment notifications'))
def receives_notifications(people, name, count):
    assert len(_comment_notifications_to(people[name])) == count


@then(parsers.cfparse('the email to "{name}" quotes "{text}"'))
def email_quotes(name, text):
    [email] = get_channel("Email").emails_to(f"{name.lower()}@example.com")
    assert text in email["body"]


@then(parsers.cfparse("the review has {count:d} comment"))
def review_comment_count(review_id, count):
    assert len(comments_for_review(review_id)) == count


@then(parsers.cfparse('the comment notification to "{name}" is marked "{status}"'))
def notification_status(people, name, status):
    [notification] = _comment_notifications_to(people[name])
    assert notification.status == status
