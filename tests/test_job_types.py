from __future__ import annotations

import pytest

from voice_intake.models import JobType
from voice_intake.services.job_types import JOB_TYPE_ALIASES, normalize_job_type


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("ITR", JobType.TAX_RETURN),
        ("Super Fund", JobType.SMSF),
        ("  income tax  ", JobType.TAX_RETURN),
        ("BAS", JobType.BAS),
        ("Fringe Benefits Tax", JobType.FBT),
        ("company", JobType.COMPANY_RETURN),
        ("Partnership Return", JobType.PARTNERSHIP_RETURN),
        ("tax planning", JobType.ADVISORY),
    ],
)
def test_exact_alias_is_case_and_whitespace_insensitive(raw: str, expected: JobType) -> None:
    assert normalize_job_type(raw) == (expected, True)


def test_every_alias_key_maps_to_itself_exactly() -> None:
    for alias, job_type in JOB_TYPE_ALIASES.items():
        assert normalize_job_type(alias.upper()) == (job_type, True)


def test_prefix_of_alias_resolves_through_fuzzy_fallback() -> None:
    assert normalize_job_type("tax ret") == (JobType.TAX_RETURN, True)


def test_alias_prefixing_longer_input_resolves() -> None:
    assert normalize_job_type("trustee return for smith") == (JobType.TRUST_RETURN, True)
    assert normalize_job_type("payroll for march") == (JobType.PAYROLL, True)


def test_fuzzy_fallback_follows_declaration_order() -> None:
    # "a" prefixes "activity statement" (BAS) before "advisory".
    assert normalize_job_type("a") == (JobType.BAS, True)


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_empty_input_is_other_and_unmatched(raw: str | None) -> None:
    assert normalize_job_type(raw) == (JobType.OTHER, False)


def test_unknown_input_is_other_and_unmatched() -> None:
    assert normalize_job_type("xyz123") == (JobType.OTHER, False)


def test_alias_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        JOB_TYPE_ALIASES["new alias"] = JobType.AUDIT  # type: ignore[index]


def test_alias_table_is_grouped_in_job_type_order() -> None:
    order = list(JobType)
    positions = [order.index(job_type) for job_type in JOB_TYPE_ALIASES.values()]
    assert positions == sorted(positions)
