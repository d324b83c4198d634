"""
Formatting, data-frame, string and general helpers.
"""
