"""
Clinic Records backend package.
"""
