"""Guard Payroll package.

Payroll computation and override reconciliation for guard staffing, organized by
feature modules (periods, attendance, sheets, payroll, reports, ...) with a thin
Flask controller layer and service/repository layers behind it.
"""
