"""Mappers from joined database rows to read models."""

from .job_mapper import JobMapper

__all__ = ["JobMapper"]
