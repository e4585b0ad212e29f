"""
Lambda handlers
"""
