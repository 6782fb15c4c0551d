"""
GitHub authentication - cached token reuse and the OAuth device flow.
"""
