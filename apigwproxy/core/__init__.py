"""
Core logic package.

Request building, response recording and body transport policies.
"""
