"""Site Payroll package.

Feature modules (workers, work_records, payroll, equipment) each carry their own
model, repository protocol, MySQL repository and service, with a thin Flask
controller layer on top.
"""
