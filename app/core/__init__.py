"""
Core domain logic: assistant access, intake progress and report rendering.
"""
