"""Core domain package for chatpad.

Core contains segmentation, classification, focus tracking and log parsing
without any terminal UI or storage-specific code, keeping the logic portable.
"""
