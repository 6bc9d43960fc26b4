"""Office Payroll package.

Feature modules (offices, employees, payments, reports, promotions, users)
each follow the same layout: frozen dataclass models, a repository protocol,
a MySQL repository, a service holding the use cases and a thin Flask
controller.
"""
