"""Shared Kernel module.

Components that both the IAM and Recipes contexts depend on: the
role/capability registry, the authorization error taxonomy, bearer token
validation and slug helpers. Changes here affect both contexts.
"""
