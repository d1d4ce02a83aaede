"""
Physical constants and the unit system used throughout the simulation.

Distances are measured in tenths of an astronomical unit, masses in solar
masses and time in days.
"""

# Gaussian gravitational constant squared, k^2 in AU^3 / (M_sun * day^2)
GAUSSIAN_G = 2.959122082855911e-4

# One distance unit is 0.1 AU, so lengths are ten times larger
DISTANCE_UNITS_PER_AU = 10.0

# G in (0.1 AU)^3 / (M_sun * day^2)
G = GAUSSIAN_G * DISTANCE_UNITS_PER_AU ** 3

# Plummer softening length (distance units), about 15 000 km
SOFTENING = 1e-3

# Host tick of a 60 Hz frame loop, in simulation time units
BASE_TICK = 1.0 / 60.0

# Frame deltas longer than this are clamped before the speed multiplier
MAX_TICK = 0.05

# Display radii: one radius unit is 1e4 km
RADIUS_SCALE = 1e-4

# True-to-scale the Sun would hide the inner planets
SUN_DISPLAY_RADIUS = 1.0
