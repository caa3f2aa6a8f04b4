"""
API Gateway Module

Single entry point that wires middleware, exception handlers, rate
limiting, health checks and routers onto the FastAPI application.
"""
from .gateway import APIGateway

__all__ = ["APIGateway"]
