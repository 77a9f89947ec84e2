"""Monthly payroll generation from employee attendance."""

__version__ = "0.1.0"
