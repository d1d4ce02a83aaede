"""
Trajectory metrics used by the diagnostics output.
"""
