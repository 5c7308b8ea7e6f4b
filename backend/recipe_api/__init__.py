"""
Recipe API backend package.
"""
