"""
Space Content Service Contract Module

This module contains:
- data_contract.py: Adobe Target payload builders used as test data
"""
