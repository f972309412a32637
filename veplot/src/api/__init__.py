"""
HTTP surface for the series-assembly pipeline.

CHANGELOG:
- 2026-10-11: Initial creation (STORY-110)
"""
