"""HTTP API for payroll core."""
