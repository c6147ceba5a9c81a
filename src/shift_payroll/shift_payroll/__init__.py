"""Shift Payroll package.

Payroll & shift accounting engine for a shift-based call-center workforce,
organized by feature modules (shifts, performance, attendance, payroll,
sales, ...) with pure calculation cores and thin service/repository layers.
"""

__version__ = "0.1.0"
