"""Shared utilities and cross-domain components.

This module contains utilities used across multiple domains:
- Exception classes for consistent error handling at the HTTP boundary
- Result type returned by domain services
- Permission system for role-based access control
- Injected clock and id generator ports
"""
