"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and results
- The in-process event bus and its handlers
- View invalidation and cache adapters
"""
