"""Template registry mapping NotificationType values to template classes.

Templates render plain text: ``{"subject", "body", "url"}``. Email bodies
are wrapped in the HTML layout at dispatch time.
"""

from opinalocal.notification.notification import NotificationType
from opinalocal.templates.category_approved import CategoryApprovedTemplate
from opinalocal.templates.new_comment import NewCommentTemplate
from opinalocal.templates.new_review import NewReviewTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.NEW_REVIEW.value: NewReviewTemplate,
    NotificationType.NEW_COMMENT.value: NewCommentTemplate,
    NotificationType.CATEGORY_APPROVED.value: CategoryApprovedTemplate,
}


def get_template(notification_type: str):
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
