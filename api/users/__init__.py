"""
User resource, the owning side of an acronym.
"""
