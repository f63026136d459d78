"""
PyQt5 desktop front-end for route replay.
"""
