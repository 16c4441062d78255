"""Fixed enumerations accepted in report/listing parameters."""

from enum import Enum


class TimesheetStatus(str, Enum):
    # Portuguese values are what the stored timesheets carry; English aliases are accepted too.
    RASCUNHO = "rascunho"
    ENVIADO = "enviado"
    APROVADO = "aprovado"
    RECUSADO = "recusado"
    BLOQUEADO = "bloqueado"
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    LOCKED = "locked"


class ReportType(str, Enum):
    SUMMARY = "summary"
    DETAILED = "detailed"


class ReportScope(str, Enum):
    TIMESHEETS = "timesheets"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    BY_EMPLOYEE = "by-employee"
    BY_VESSEL = "by-vessel"


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    PDF = "pdf"
    EXCEL = "excel"
