"""Canonical job types used for reporting and filtering."""

from __future__ import annotations

from enum import Enum


class JobType(str, Enum):
    """Closed set of task categories, in declaration order."""

    TAX_RETURN = "Tax Return"
    BAS = "BAS"
    ADVISORY = "Advisory"
    FINANCIAL_STATEMENTS = "Financial Statements"
    AUDIT = "Audit"
    BOOKKEEPING = "Bookkeeping"
    PAYROLL = "Payroll"
    SMSF = "SMSF"
    COMPANY_RETURN = "Company Return"
    TRUST_RETURN = "Trust Return"
    PARTNERSHIP_RETURN = "Partnership Return"
    FBT = "FBT"
    OTHER = "Other"


__all__ = ["JobType"]
