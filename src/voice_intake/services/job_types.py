"""Map dictated job-type phrases onto the canonical job types."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple

from ..models import JobType

# Grouped by category in JobType declaration order; the prefix fallback
# depends on this order.
_ALIASES: dict[str, JobType] = {
    # Tax Return
    "tax return": JobType.TAX_RETURN,
    "tax": JobType.TAX_RETURN,
    "itr": JobType.TAX_RETURN,
    "income tax": JobType.TAX_RETURN,
    "income tax return": JobType.TAX_RETURN,
    "individual tax return": JobType.TAX_RETURN,
    "individual return": JobType.TAX_RETURN,
    "personal tax": JobType.TAX_RETURN,
    # BAS
    "bas": JobType.BAS,
    "business activity statement": JobType.BAS,
    "activity statement": JobType.BAS,
    "ias": JobType.BAS,
    "gst": JobType.BAS,
    "gst return": JobType.BAS,
    # Advisory
    "advisory": JobType.ADVISORY,
    "advice": JobType.ADVISORY,
    "consulting": JobType.ADVISORY,
    "tax planning": JobType.ADVISORY,
    "meeting": JobType.ADVISORY,
    # Financial Statements
    "financial statements": JobType.FINANCIAL_STATEMENTS,
    "financial statement": JobType.FINANCIAL_STATEMENTS,
    "financials": JobType.FINANCIAL_STATEMENTS,
    "accounts": JobType.FINANCIAL_STATEMENTS,
    "annual accounts": JobType.FINANCIAL_STATEMENTS,
    # Audit
    "audit": JobType.AUDIT,
    "smsf audit": JobType.AUDIT,
    "assurance": JobType.AUDIT,
    # Bookkeeping
    "bookkeeping": JobType.BOOKKEEPING,
    "book keeping": JobType.BOOKKEEPING,
    "books": JobType.BOOKKEEPING,
    "reconciliation": JobType.BOOKKEEPING,
    "bank reconciliation": JobType.BOOKKEEPING,
    "data entry": JobType.BOOKKEEPING,
    # Payroll
    "payroll": JobType.PAYROLL,
    "wages": JobType.PAYROLL,
    "stp": JobType.PAYROLL,
    "single touch payroll": JobType.PAYROLL,
    "payg": JobType.PAYROLL,
    # SMSF
    "smsf": JobType.SMSF,
    "super fund": JobType.SMSF,
    "self managed super fund": JobType.SMSF,
    "self-managed super fund": JobType.SMSF,
    "smsf return": JobType.SMSF,
    # Company Return
    "company return": JobType.COMPANY_RETURN,
    "company tax return": JobType.COMPANY_RETURN,
    "company": JobType.COMPANY_RETURN,
    "ctr": JobType.COMPANY_RETURN,
    # Trust Return
    "trust return": JobType.TRUST_RETURN,
    "trust tax return": JobType.TRUST_RETURN,
    "trust": JobType.TRUST_RETURN,
    # Partnership Return
    "partnership return": JobType.PARTNERSHIP_RETURN,
    "partnership tax return": JobType.PARTNERSHIP_RETURN,
    "partnership": JobType.PARTNERSHIP_RETURN,
    # FBT
    "fbt": JobType.FBT,
    "fbt return": JobType.FBT,
    "fringe benefits tax": JobType.FBT,
    "fringe benefits": JobType.FBT,
    # Other
    "other": JobType.OTHER,
    "general": JobType.OTHER,
    "misc": JobType.OTHER,
}

JOB_TYPE_ALIASES: Mapping[str, JobType] = MappingProxyType(_ALIASES)


class JobTypeMatch(NamedTuple):
    job_type: JobType
    matched: bool


def normalize_job_type(
    raw: str | None,
    aliases: Mapping[str, JobType] = JOB_TYPE_ALIASES,
) -> JobTypeMatch:
    """Resolve free text to a canonical job type.

    An exact alias wins. Otherwise the first alias (in table order) that is a
    prefix of the input, or that the input is a prefix of, is accepted, so
    ``"tax ret"`` resolves to Tax Return. Anything else is ``Other`` with
    ``matched=False``. Never raises.
    """
    if not raw:
        return JobTypeMatch(JobType.OTHER, False)
    phrase = raw.strip().lower()
    if not phrase:
        return JobTypeMatch(JobType.OTHER, False)

    exact = aliases.get(phrase)
    if exact is not None:
        return JobTypeMatch(exact, True)

    for alias, job_type in aliases.items():
        if alias.startswith(phrase) or phrase.startswith(alias):
            return JobTypeMatch(job_type, True)

    return JobTypeMatch(JobType.OTHER, False)


__all__ = ["JOB_TYPE_ALIASES", "JobTypeMatch", "normalize_job_type"]
