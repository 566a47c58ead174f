"""Employee Management package.

This package is organized by feature modules (employees, departments, leaves,
payroll, ...) with SOLID service/repository layers over MySQL.
"""
