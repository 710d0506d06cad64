"""
droidsign - Release signing and build configuration for Android app modules.

Loads and validates key.properties signing credentials and the declarative
droidsign.yaml build settings before handing them to Gradle.
"""

__version__ = "1.0.0"
__author__ = "droidsign Team"
