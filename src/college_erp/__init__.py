"""College ERP aggregation package.

Organized by feature modules (attendance, grades, fees, leaves, summary)
with pure aggregators, a record-store layer and a thin Flask controller layer.
"""
