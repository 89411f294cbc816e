"""
Acronym resource: schemas, SQL facade, JSON API.
"""
