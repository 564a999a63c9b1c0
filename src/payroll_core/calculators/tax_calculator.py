"""Withholding and employer tax calculation from built-in rates.

Every cap here is applied to the gross of a single check, not to year-to-date
wages, so withholding near a wage base is understated for employees paid more
than once a year.
"""

from __future__ import annotations

from decimal import Decimal

from payroll_core.calculators.money import ZERO, round_cents, to_decimal
from payroll_core.calculators.types import EmployeeSnapshot, TaxWithholding

FEDERAL_INCOME_RATE = Decimal("0.22")

SOCIAL_SECURITY_RATE = Decimal("0.062")
SOCIAL_SECURITY_WAGE_BASE = Decimal("168600")

MEDICARE_RATE = Decimal("0.0145")
ADDITIONAL_MEDICARE_RATE = Decimal("0.009")
ADDITIONAL_MEDICARE_THRESHOLD = Decimal("200000")

FUTA_RATE = Decimal("0.006")
FUTA_WAGE_BASE = Decimal("7000")

SUTA_RATE = Decimal("0.027")
SUTA_WAGE_BASE = Decimal("10000")

# Flat income tax rates, 50 states + DC
STATE_TAX_RATES: dict[str, Decimal] = {
    code: Decimal(rate)
    for code, rate in {
        "AL": "0.050", "AK": "0.000", "AZ": "0.025", "AR": "0.044", "CA": "0.093",
        "CO": "0.044", "CT": "0.050", "DE": "0.066", "DC": "0.085", "FL": "0.000",
        "GA": "0.055", "HI": "0.080", "ID": "0.058", "IL": "0.049", "IN": "0.032",
        "IA": "0.044", "KS": "0.057", "KY": "0.045", "LA": "0.042", "ME": "0.071",
        "MD": "0.057", "MA": "0.050", "MI": "0.043", "MN": "0.098", "MS": "0.050",
        "MO": "0.049", "MT": "0.068", "NE": "0.068", "NV": "0.000", "NH": "0.000",
        "NJ": "0.109", "NM": "0.049", "NY": "0.085", "NC": "0.046", "ND": "0.029",
        "OH": "0.040", "OK": "0.048", "OR": "0.099", "PA": "0.031", "RI": "0.059",
        "SC": "0.065", "SD": "0.000", "TN": "0.000", "TX": "0.000", "UT": "0.049",
        "VT": "0.088", "VA": "0.057", "WA": "0.000", "WV": "0.065", "WI": "0.076",
        "WY": "0.000",
    }.items()
}


class TaxCalculator:
    """Calculates employee withholding and employer-only taxes.

    Each component is rounded to the cent independently.
    """

    def withhold(self, gross: Decimal, employee: EmployeeSnapshot) -> TaxWithholding:
        """All five employee-side components for one check."""
        return TaxWithholding(
            federal=self.federal_income(gross),
            state=self.state_income(gross, employee.state),
            local=self.local_income(gross, employee.locality),
            social_security=self.social_security(gross),
            medicare=self.medicare(gross),
        )

    def federal_income(self, gross: Decimal) -> Decimal:
        """Flat-rate federal income tax withholding."""
        return round_cents(to_decimal(gross) * FEDERAL_INCOME_RATE)

    def state_income(self, gross: Decimal, state_code: str | None) -> Decimal:
        """State income tax; zero for no state or an unknown code."""
        if not state_code:
            return ZERO
        rate = STATE_TAX_RATES.get(state_code.strip().upper())
        if rate is None:
            return ZERO
        return round_cents(to_decimal(gross) * rate)

    def local_income(self, gross: Decimal, locality: str | None = None) -> Decimal:
        """Local income tax. No localities are configured."""
        return ZERO

    def social_security(self, gross: Decimal) -> Decimal:
        """Employee Social Security, capped at the wage base."""
        taxable = min(to_decimal(gross), SOCIAL_SECURITY_WAGE_BASE)
        return round_cents(taxable * SOCIAL_SECURITY_RATE)

    def medicare(self, gross: Decimal) -> Decimal:
        """Employee Medicare plus the additional rate above the threshold."""
        gross = to_decimal(gross)
        tax = round_cents(gross * MEDICARE_RATE)
        if gross > ADDITIONAL_MEDICARE_THRESHOLD:
            excess = gross - ADDITIONAL_MEDICARE_THRESHOLD
            tax = round_cents(tax + excess * ADDITIONAL_MEDICARE_RATE)
        return tax

    def futa(self, gross: Decimal) -> Decimal:
        """Employer FUTA, capped at the FUTA wage base."""
        taxable = min(to_decimal(gross), FUTA_WAGE_BASE)
        return round_cents(taxable * FUTA_RATE)

    def suta(self, gross: Decimal, state_code: str | None = None) -> Decimal:
        """Employer SUTA at the default rate and wage base for every state."""
        taxable = min(to_decimal(gross), SUTA_WAGE_BASE)
        return round_cents(taxable * SUTA_RATE)
