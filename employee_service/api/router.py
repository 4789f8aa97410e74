"""
API Router Aggregator
=============================================================================
Aggregates every sub-router into one, which main.py mounts on the app:
  - health.py    → /health, /ready, /metrics
  - employees.py → /employees/*
=============================================================================
"""

from fastapi import APIRouter

from employee_service.api.employees import router as employees_router
from employee_service.api.health import router as health_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(employees_router)
