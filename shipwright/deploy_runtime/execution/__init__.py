"""Command environment pipeline for the deploy runtime.

This package contains the components that turn host state and deployment
settings into a launch descriptor:

- **catalog**: Well-known variable names and their pure default functions
- **compositor**: Override-vs-default decision per variable
- **paths**: Search path aggregation and path comparison
- **builder**: Descriptor assembly for generic commands and the starter script
"""
