# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, progress, console tables

from . import logging

__all__ = [
    "logging",
]
