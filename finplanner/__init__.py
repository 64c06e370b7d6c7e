"""
Personal finance planning backend.
"""
