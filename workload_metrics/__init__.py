"""
Peak CPU/memory usage report for TKE deployments.
"""
__version__ = "1.0.0"
