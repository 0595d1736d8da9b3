"""
PostgreSQL persistence for issue events and issue state snapshots.
"""
