"""
Matplotlib plots for k-means diagnostics.
"""
