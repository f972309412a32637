"""
Series-assembly package for VE.Direct telemetry charts.

Turns sparse, differential telemetry snapshots from a solar charge
controller / inverter into per-variable chart series with axis hints,
ready to hand to a line-chart renderer.

CHANGELOG:
- 2026-10-02: Initial creation (STORY-101)

TODO:
- None
"""
