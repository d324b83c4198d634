"""
Numerical routines: k-means clustering, Hartigan's rule and coordinate
conversion.
"""
