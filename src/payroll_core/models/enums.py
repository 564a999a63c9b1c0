"""Closed value sets for payroll records."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum


class EmployeeStatus(str, Enum):
    """Employment status values."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class PayBasis(str, Enum):
    """How an employee's pay rate is expressed."""

    HOURLY = "hourly"
    SALARY = "salary"


class PayFrequency(str, Enum):
    """Pay frequency values."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

    @property
    def periods_per_year(self) -> int:
        return {"weekly": 52, "biweekly": 26, "semimonthly": 24, "monthly": 12}[self.value]


class TimeEntryPayType(str, Enum):
    """Pay type of a time entry."""

    REGULAR = "regular"
    OVERTIME = "overtime"
    DOUBLETIME = "doubletime"
    PREMIUM = "premium"
    PERDIEM = "perdiem"

    @property
    def multiplier(self) -> Decimal:
        return _PAY_TYPE_MULTIPLIERS[self.value]

    @property
    def is_overtime(self) -> bool:
        return self in (TimeEntryPayType.OVERTIME, TimeEntryPayType.DOUBLETIME)


_PAY_TYPE_MULTIPLIERS = {
    "regular": Decimal("1.0"),
    "overtime": Decimal("1.5"),
    "doubletime": Decimal("2.0"),
    "premium": Decimal("1.0"),
    "perdiem": Decimal("1.0"),
}


class EarningType(str, Enum):
    """Earning configuration types."""

    REGULAR = "regular"
    OVERTIME = "overtime"
    DOUBLETIME = "doubletime"
    PREMIUM = "premium"
    PERDIEM = "perdiem"
    PIECERATE = "piecerate"
    COMMISSION = "commission"


class DeductionType(str, Enum):
    """Deduction tax treatment."""

    PRETAX = "pretax"
    POSTTAX = "posttax"
    GARNISHMENT = "garnishment"


class CalcMethod(str, Enum):
    """Calculation method for deductions and benefits."""

    FLAT = "flat"
    PERCENT = "percent"


class BenefitType(str, Enum):
    """Benefit plan types."""

    HEALTH = "health"
    DENTAL = "dental"
    VISION = "vision"
    LIFE = "life"
    RETIREMENT = "retirement"
    HSA = "hsa"
    FSA = "fsa"
    OTHER = "other"


class TaxJurisdiction(str, Enum):
    """Tax jurisdiction levels."""

    FEDERAL = "federal"
    STATE = "state"
    LOCAL = "local"


class TaxType(str, Enum):
    """Tax kinds configurable in a tax table."""

    INCOME = "income"
    FICA_SS = "fica_ss"
    FICA_MED = "fica_med"
    FUTA = "futa"
    SUTA = "suta"


class TaxFilingType(str, Enum):
    """Tax filing forms."""

    FORM_941 = "941"
    FORM_940 = "940"
    W2 = "w2"
    STATE_QUARTERLY = "state_quarterly"


class TaxFilingStatus(str, Enum):
    """Tax filing status values."""

    DRAFT = "draft"
    FILED = "filed"
