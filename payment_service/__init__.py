"""
Payment Service

Initiates payments against an external provider and reconciles their
status on demand:
1. Domain: the Payment entity, its identifier and the two ports
2. Application: initiate / check-status workflows
3. Infrastructure: SQLAlchemy and in-memory stores, HTTP provider client
4. API: FastAPI boundary mapping domain errors to HTTP responses
"""

__version__ = "1.0.0"
