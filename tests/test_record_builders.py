from __future__ import annotations

from datetime import datetime, timedelta, timezone

from voice_intake.models import JobType, TaskRecord
from voice_intake.services.intake import (
    build_description,
    build_summary,
    format_timestamp,
    generate_task_id,
)

FIXED_NOW = datetime(2024, 12, 1, 9, 30, 15, 250000, tzinfo=timezone.utc)


def test_task_id_combines_time_and_randomness() -> None:
    first = generate_task_id(FIXED_NOW)
    second = generate_task_id(FIXED_NOW)

    millis, _, suffix = first.partition("-")
    assert millis == str(int(FIXED_NOW.timestamp() * 1000))
    assert len(suffix) == 7
    assert suffix.isalnum() and suffix == suffix.lower()
    assert first != second


def test_timestamp_is_utc_with_milliseconds() -> None:
    assert format_timestamp(FIXED_NOW) == "2024-12-01T09:30:15.250Z"
    sydney = FIXED_NOW.astimezone(timezone(timedelta(hours=11)))
    assert format_timestamp(sydney) == "2024-12-01T09:30:15.250Z"


def test_description_only_annotates_unmatched_non_empty_input() -> None:
    assert build_description("", False, "") == ""
    assert build_description("", False, "notes") == "notes"
    assert build_description("bas", True, "notes") == "notes"
    assert build_description("xyz", False, "") == "[Job type: xyz]"


def test_summary_mentions_unmapped_job_type() -> None:
    assert build_summary("BAS", "Acme", "2025-01-28", "bas", True) == (
        "Task added: BAS for Acme. Due: 2025-01-28."
    )
    assert build_summary("Other", "Acme", "", "widgets", False) == (
        'Task added: Other for Acme. Due: No due date. (Job type "widgets" mapped to Other)'
    )


def test_task_record_serialises_with_camel_case_keys() -> None:
    record = TaskRecord(
        client="Acme",
        job_type=JobType.FBT,
        created_by="alice",
        created_at="2024-12-01T09:30:15.250Z",
    )

    document = record.to_document()

    assert document["jobType"] == "FBT"
    assert document["status"] == "Not Started"
    assert document["billable"] is True
    assert "job_type" not in document
