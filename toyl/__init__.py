"""
toyl: a tiny integer language, built into a tree first and executed afterwards.

"""
__version__ = "0.1.0"
