"""
Applications module - License applications and their steps.

This module handles:
- Application entity and its review lifecycle
- Application steps copied from requirement templates
- Step completion and progress tracking
"""
