"""
Test doubles for the Jira client.
"""
