"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions, value objects and the admin guard
- Middleware components
- Background tasks, metrics and instrumentation
"""
