"""Use-case layer for the manual host-addition workflow.

Each module coordinates domain objects and ports without performing transport
I/O directly, preserving MVVM + Hexagonal boundaries.
"""
