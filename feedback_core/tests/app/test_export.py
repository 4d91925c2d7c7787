import csv
import datetime
import io

from feedback_core.app import models
from feedback_core.app.export import CSV_HEADER, export_filename, responses_to_csv

CREATED_AT = datetime.datetime(2024, 5, 1, 8, 30, tzinfo=datetime.timezone.utc)


def _response(uuid: str, submitted_by=None) -> models.FeedbackResponse:
    return models.FeedbackResponse(
        uuid=uuid,
        submitted_by=submitted_by,
        created_at=CREATED_AT,
        status="submitted",
        sentiment="neutral",
        priority="medium",
    )


def test_csv_has_header_and_one_line_per_response() -> None:
    submitter = models.User(email="jane@example.com", full_name="Doe, Jane")
    text = responses_to_csv(
        [_response("r1"), _response("r2", submitter), _response("r3")]
    )
    lines = text.splitlines()
    assert len(lines) == 4
    assert lines[0] == ",".join(CSV_HEADER)

    rows = list(csv.reader(io.StringIO(text)))
    assert rows[1] == [
        "r1",
        "Anonymous",
        "2024-05-01T08:30:00+00:00",
        "submitted",
        "neutral",
        "medium",
    ]
    assert rows[2][1] == "Doe, Jane"
    assert '"Doe, Jane"' in lines[2]


def test_csv_without_responses() -> None:
    assert responses_to_csv([]).splitlines() == [",".join(CSV_HEADER)]


def test_export_filename_is_header_safe() -> None:
    form = models.Form(uuid="abc", title='Q3 "team" survey/ideas')
    assert export_filename(form, "csv") == "responses-Q3__team__survey_ideas-abc.csv"
