"""Pipeline orchestration.

- zone_pipeline: per-zone, per-document and batch composition of the stages
"""
