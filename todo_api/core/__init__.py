"""Core application components.

This module provides the foundational components for the Todo API:
- Application settings and configuration
- Prisma client construction for the database backend
- The dependency container wiring stores and services together
"""
