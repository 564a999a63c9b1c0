"""Seed TaxTable records mirroring the built-in withholding rates.

The engine never reads these rows; they document the rates in effect so
operators can review them alongside tax filings.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_core.calculators import tax_calculator as rates
from payroll_core.models.enums import TaxJurisdiction, TaxType
from payroll_core.schemas import TaxTableCreate
from payroll_core.services.configuration_service import ConfigurationService

logger = logging.getLogger(__name__)


def built_in_tax_tables(year: int) -> list[TaxTableCreate]:
    """TaxTable payloads for the federal rates and every state income rate."""
    federal = TaxJurisdiction.FEDERAL
    tables = [
        TaxTableCreate(
            jurisdiction=federal, year=year, tax_type=TaxType.INCOME,
            rate=rates.FEDERAL_INCOME_RATE,
        ),
        TaxTableCreate(
            jurisdiction=federal, year=year, tax_type=TaxType.FICA_SS,
            rate=rates.SOCIAL_SECURITY_RATE, wage_base=rates.SOCIAL_SECURITY_WAGE_BASE,
        ),
        TaxTableCreate(
            jurisdiction=federal, year=year, tax_type=TaxType.FICA_MED,
            rate=rates.MEDICARE_RATE,
        ),
        TaxTableCreate(
            jurisdiction=federal, year=year, tax_type=TaxType.FUTA,
            rate=rates.FUTA_RATE, wage_base=rates.FUTA_WAGE_BASE,
        ),
    ]
    for state, rate in sorted(rates.STATE_TAX_RATES.items()):
        tables.append(
            TaxTableCreate(
                jurisdiction=TaxJurisdiction.STATE, state=state, year=year,
                tax_type=TaxType.INCOME, rate=rate,
            )
        )
        tables.append(
            TaxTableCreate(
                jurisdiction=TaxJurisdiction.STATE, state=state, year=year,
                tax_type=TaxType.SUTA, rate=rates.SUTA_RATE, wage_base=rates.SUTA_WAGE_BASE,
            )
        )
    return tables


async def seed_tax_tables(session: AsyncSession, year: int) -> int:
    """Insert the built-in rates for a year unless that year is already seeded.

    Returns the number of rows created.
    """
    service = ConfigurationService(session)
    if await service.list_tax_tables(year=year):
        logger.info("Tax tables for %s already exist, skipping", year)
        return 0

    tables = built_in_tax_tables(year)
    for data in tables:
        await service.create_tax_table(data)
    logger.info("Created %d tax tables for %s", len(tables), year)
    return len(tables)
