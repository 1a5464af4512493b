"""
Command Line Interface Package

Command Structure:
- family-budget: Main entry point with utility commands (version, config)
- family-budget report: Build, render and send the monthly budget report
"""
