"""
Backend Scripts Module

Utility scripts for database operations and maintenance.

Available scripts:
    - seed_roles.py: Creates the default custom roles

Usage:
    python -m scripts.seed_roles
"""
