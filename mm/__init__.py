"""
mm - modkit module management CLI tool.
"""
