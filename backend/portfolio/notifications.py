"""
Notifications for new contact submissions.

Email delivery is not wired up; submissions are logged so they show up in
the host's log stream and in the admin inbox.
"""
import logging

logger = logging.getLogger(__name__)


def notify_new_contact_submission(submission):
    logger.info(
        "New contact submission %s from %s <%s>: %s",
        submission.pk, submission.name, submission.email, submission.subject or '(no subject)',
    )
