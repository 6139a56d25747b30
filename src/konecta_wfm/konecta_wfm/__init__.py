"""Konecta WFM package.

Feature modules (attendance, auxlogs, leave, shift_swaps, schedules, ...) each
carry a model, a repository interface with its MySQL implementation, a
service, and a thin Flask JSON controller.
"""
