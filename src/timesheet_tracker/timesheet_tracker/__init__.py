"""Painter Timesheets package.

Feature modules (users, timesheets, payroll) each carry a model, a
repository Protocol with a MySQL implementation, a service holding the
business rules and a thin Flask controller.
"""
