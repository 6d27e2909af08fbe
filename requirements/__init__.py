"""
Requirements module - License requirement templates.

This module handles:
- Requirement entity and lazy (state, license type) resolution
- Regular and expert template steps
- Required documents and template files
- Browse views used for copying between requirements
"""
