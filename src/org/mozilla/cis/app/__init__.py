"""
CIS People Application Layer

This package wires the Person API client to its surroundings.

Key Components:
- config.py: Configuration management using Pydantic settings
- people.py: The people query adapter and client construction from settings
- cli.py: Command line entry point with logging and error reporting setup

The command line entry point reads one identifier from its arguments, looks the person
up, and prints the flattened people record as JSON.
"""
