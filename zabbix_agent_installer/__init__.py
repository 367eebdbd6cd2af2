"""Zabbix Agent 2 installer for Debian hosts.

Core design goals:
- Idempotent steps driven by live package queries
- Explicit privilege, threaded to every command
- GPU-aware agent configuration
- Centralized logging
"""

__all__ = []
