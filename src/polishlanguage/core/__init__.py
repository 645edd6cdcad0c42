# Core module - Business logic

"""
Core functionality for the polish/translate pipeline.
Contains settings, provider adapters, the transform pipeline and its invocation guard.
"""
