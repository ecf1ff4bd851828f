"""MotorPH payroll component engine."""

__version__ = "1.0.0"
