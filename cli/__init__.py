"""
Command line tools for claim analysis.
"""
