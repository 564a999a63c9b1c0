"""Payroll gross-to-net engine and pay run lifecycle.

This package contains:
- Workforce ledger (employees, time entries)
- Configuration registry (earnings, deductions, benefits, tax tables,
  tax filings, workers' comp class codes)
- Gross-to-net calculation engine
- Pay run state machine
- Payroll reporting
"""

__version__ = "0.1.0"
