import csv
import io
from typing import Iterable, List

from feedback_core.app import models
from feedback_core.utils.base import as_utc

CSV_HEADER: List[str] = [
    "Response ID",
    "Submitted By",
    "Submitted At",
    "Status",
    "Sentiment",
    "Priority",
]

ANONYMOUS_SUBMITTER = "Anonymous"


def submitter_name(response: models.FeedbackResponse) -> str:
    if response.submitted_by is None:
        return ANONYMOUS_SUBMITTER
    return response.submitted_by.display_name


def responses_to_csv(responses: Iterable[models.FeedbackResponse]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in responses:
        writer.writerow(
            [
                r.uuid,
                submitter_name(r),
                as_utc(r.created_at).isoformat(),
                r.status,
                r.sentiment,
                r.priority,
            ]
        )
    return buf.getvalue()


def export_filename(form: models.Form, extension: str) -> str:
    # Keep header-safe characters only
    safe_title = "".join(c if c.isalnum() or c in "-_" else "_" for c in form.title)
    return f"responses-{safe_title}-{form.uuid}.{extension}"
