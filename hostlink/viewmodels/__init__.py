"""ViewModel package for UI state and command surfaces.

Call context:
    ``hostlink/app/main.py`` and the add-host controller import concrete
    viewmodels from this package to bind view callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types and lightweight formatting
    helpers only. I/O adapters and the worker thread remain outside.
"""
