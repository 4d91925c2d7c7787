import datetime
from typing import Optional

from feedback_core.app import models
from feedback_core.app.errors import (
    Expired,
    NotAccessible,
    NotFound,
    ResponseLimitReached,
)
from feedback_core.utils.base import as_utc


def check_submission_allowed(
    form: Optional[models.Form], *, now: datetime.datetime
) -> models.Form:
    """
    Decide whether ``form`` takes a new response right now.

    Checks run in a fixed order and the first failure wins: existence, then
    active and public, then expiry, then the response cap. Callers must pass
    freshly loaded form state since ``total_responses`` moves under them.
    """
    if form is None:
        raise NotFound("Form not found")
    if not (form.is_active and form.is_public):
        raise NotAccessible()
    if form.expires_at is not None and as_utc(now) > as_utc(form.expires_at):
        raise Expired()
    if (
        form.max_responses is not None
        and form.total_responses >= form.max_responses
    ):
        raise ResponseLimitReached()
    return form
