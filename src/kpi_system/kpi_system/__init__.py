"""KPI System package.

Feature modules (scoring, kpi, evaluations, reports, users) with a thin Flask
controller layer over service/repository layers. The scoring module is pure
and has no I/O; everything else talks to MySQL through repositories.
"""
