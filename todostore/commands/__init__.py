"""
Commands run through ``python -m todostore``.
"""
