"""
Provisioning module - Step ordering and snapshot copies.

This module handles:
- Per-partition step ordering (next order, reorder)
- Copying steps and documents between requirements
- Provisioning application steps from requirement templates
"""
