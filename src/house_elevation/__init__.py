"""
House Elevation Flood-Risk Framework.

A small, deterministic toolkit for pricing coastal flood risk to a single
structure and the cost of elevating it. Expected annual damage is integrated
over a surge exceedance-probability curve, discounted across a sea-level-rise
trajectory, and combined with a one-time elevation cost so that candidate
raise heights can be compared by total cost.
"""

__version__ = "0.1.0"
