"""
Cryptalias Application Layer

This package holds the pieces that wire the resolution library into runnable
tools: configuration, logging and error reporting setup, and utilities.

Key Components:
- config.py: Configuration management using Pydantic settings
- cli.py: Logging and Sentry bootstrap shared by the command line tools
- util/: Key generation, envelope signing and offline verification

The resolution library itself never reads the environment. Tools build a
Settings instance and an HTTP session and pass both to CryptaliasResolver.
"""
