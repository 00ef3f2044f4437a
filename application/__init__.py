"""
Application layer for the planner API.

This package contains:
- exceptions.py: error taxonomy shared by services, infrastructure and routers
- ports/: Protocol interfaces for storage, the completion service and push delivery
"""
