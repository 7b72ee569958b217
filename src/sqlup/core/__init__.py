"""Configuration and logging shared by every sqlup module."""
